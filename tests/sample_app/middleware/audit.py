from fluxor import Effect, Middleware


class AuditMiddleware(Middleware):
    def __init__(self):
        self.actions = []

    def before_dispatch(self, action) -> None:
        self.actions.append(action)


class AuditEffect(Effect):
    def should_react_to(self, action) -> bool:
        return True

    async def handle(self, action, dispatcher) -> None:
        return None
