"""
Markers: @reducer_method, Effect/EffectWrapper, the default inspector,
and the fault types raised by discovery configuration.
"""

import pytest

from fluxor.effects import INFRASTRUCTURE_MARKER, Effect, EffectWrapper, is_infrastructure
from fluxor.reducers import ReducerMethodMarker, get_reducer_marker, reducer_method
from fluxor.dependency_injection import DefaultMarkerInspector, MarkerInspector
from fluxor.faults import (
    Fault,
    FaultDomain,
    MiddlewareTypeFault,
    ScanTargetMissingFault,
    Severity,
)


class Tick:
    pass


class Recorder:
    def __init__(self):
        self.dispatched = []

    def dispatch(self, action):
        self.dispatched.append(action)


# ============================================================================
# @reducer_method
# ============================================================================

class TestReducerMethod:

    def test_bare_decorator(self):
        @reducer_method
        def reduce(state, action):
            return state

        assert get_reducer_marker(reduce) == ReducerMethodMarker()
        assert reduce(1, None) == 1

    def test_with_action_type(self):
        @reducer_method(Tick)
        def reduce(state):
            return state

        assert get_reducer_marker(reduce).action_type is Tick

    def test_called_without_arguments(self):
        @reducer_method()
        def reduce(state, action):
            return state

        assert get_reducer_marker(reduce) == ReducerMethodMarker(None)

    def test_on_staticmethod_and_classmethod(self):
        class Host:
            @reducer_method
            @staticmethod
            def s(state, action):
                return state

            @reducer_method(Tick)
            @classmethod
            def c(cls, state):
                return state

        assert get_reducer_marker(Host.__dict__["s"]) == ReducerMethodMarker()
        assert get_reducer_marker(Host.s) == ReducerMethodMarker()
        assert get_reducer_marker(Host.__dict__["c"]).action_type is Tick

    def test_unmarked(self):
        def plain(state, action):
            return state

        assert get_reducer_marker(plain) is None
        assert get_reducer_marker(42) is None

    def test_marker_not_inherited_by_override(self):
        class Base:
            @reducer_method
            def on_tick(self, state, action):
                return state

        class Child(Base):
            def on_tick(self, state, action):
                return state

        assert get_reducer_marker(Base.on_tick) is not None
        assert get_reducer_marker(Child.on_tick) is None


# ============================================================================
# Effect & EffectWrapper
# ============================================================================

class TestEffects:

    def test_effect_is_abstract(self):
        with pytest.raises(TypeError):
            Effect()

    def test_infrastructure_marker_is_not_inherited(self):
        class UserEffect(EffectWrapper):
            pass

        assert is_infrastructure(Effect)
        assert is_infrastructure(EffectWrapper)
        assert not is_infrastructure(UserEffect)
        assert getattr(UserEffect, INFRASTRUCTURE_MARKER) is True

    def test_wrapper_filters_by_action_type(self):
        wrapper = EffectWrapper(Tick, lambda action, dispatcher: None)

        assert wrapper.should_react_to(Tick())
        assert not wrapper.should_react_to(object())

    def test_wrapper_without_action_type_reacts_to_all(self):
        assert EffectWrapper(None, lambda a, d: None).should_react_to(object())

    @pytest.mark.asyncio
    async def test_wrapper_runs_sync_handler(self):
        dispatcher = Recorder()
        wrapper = EffectWrapper(Tick, lambda action, d: d.dispatch("tock"))

        await wrapper.handle(Tick(), dispatcher)

        assert dispatcher.dispatched == ["tock"]

    @pytest.mark.asyncio
    async def test_wrapper_runs_async_handler(self):
        async def handler(action, d):
            d.dispatch(action)

        dispatcher = Recorder()
        tick = Tick()
        await EffectWrapper(Tick, handler).handle(tick, dispatcher)

        assert dispatcher.dispatched == [tick]


# ============================================================================
# Default inspector
# ============================================================================

class TestDefaultInspector:

    def setup_method(self):
        self.inspector = DefaultMarkerInspector()

    def test_satisfies_protocol(self):
        assert isinstance(self.inspector, MarkerInspector)

    def test_is_effect(self):
        class Concrete(Effect):
            def should_react_to(self, action):
                return True

            async def handle(self, action, dispatcher):
                pass

        assert self.inspector.is_effect(Concrete)
        assert self.inspector.is_effect(EffectWrapper)
        assert not self.inspector.is_effect(Tick)
        assert not self.inspector.is_effect(Concrete())

    def test_is_effect_wrapper(self):
        class Custom(EffectWrapper):
            pass

        assert self.inspector.is_effect_wrapper(EffectWrapper)
        assert self.inspector.is_effect_wrapper(Effect)
        assert not self.inspector.is_effect_wrapper(Custom)

    def test_is_abstract(self):
        assert self.inspector.is_abstract(Effect)
        assert not self.inspector.is_abstract(EffectWrapper)
        assert not self.inspector.is_abstract(Tick)


# ============================================================================
# Faults
# ============================================================================

class TestFaults:

    def test_scan_target_missing(self):
        fault = ScanTargetMissingFault()

        assert fault.code == "SCAN_TARGET_MISSING"
        assert fault.domain == FaultDomain.DISCOVERY
        assert fault.severity == Severity.ERROR
        assert str(fault).startswith("[SCAN_TARGET_MISSING] Argument 'module'")

    def test_middleware_type_fault(self):
        fault = MiddlewareTypeFault(Tick)

        assert fault.metadata == {"candidate": "Tick"}
        assert "not a subclass of fluxor.middleware.Middleware" in fault.message

    def test_to_dict(self):
        data = ScanTargetMissingFault("assembly").to_dict()

        assert data == {
            "code": "SCAN_TARGET_MISSING",
            "message": "Argument 'assembly' is required: a module to scan must be given",
            "domain": "discovery",
            "severity": "error",
            "retryable": False,
            "metadata": {"argument": "assembly"},
        }

    def test_domain_defaults(self):
        fault = Fault(code="X", message="x", domain=FaultDomain.CONFIG)

        assert fault.severity == Severity.FATAL
        assert fault.retryable is False
        assert repr(fault) == "Fault(code='X', domain=config, severity=fatal)"

    def test_fault_requires_code_message_domain(self):
        with pytest.raises(TypeError):
            Fault(code="X")
