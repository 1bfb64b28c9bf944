from abc import ABC, abstractmethod
from dataclasses import dataclass

from fluxor import reducer_method


@dataclass(frozen=True)
class AddTodo:
    title: str


@dataclass(frozen=True)
class ClearTodos:
    pass


@dataclass(frozen=True)
class TodoState:
    items: tuple = ()


class BaseTodoReducers(ABC):
    @abstractmethod
    def empty_state(self) -> TodoState:
        ...

    @reducer_method(ClearTodos)
    def on_clear(self, state: TodoState, action: ClearTodos) -> TodoState:
        return self.empty_state()


class TodoReducers(BaseTodoReducers):
    def empty_state(self) -> TodoState:
        return TodoState()

    @reducer_method(AddTodo)
    def on_add(self, state: TodoState, action: AddTodo) -> TodoState:
        return TodoState(state.items + (action.title,))
