"""
Reducer discovery: marked methods, host registration, abstract hosts.
"""

from abc import ABC, abstractmethod

from fluxor.reducers import ReducerMethodMarker, reducer_method
from fluxor.dependency_injection import (
    DiscoveredReducerMethod,
    TypeAndMethod,
    discover_reducer_methods,
)
from fluxor.dependency_injection.candidates import declared_methods, methods_of


class Ping:
    pass


class Pong:
    pass


class HostX:
    @staticmethod
    @reducer_method(Ping)
    def m1(state, action):
        return state

    @reducer_method(Pong)
    def m2(self, state, action):
        return state


class AbstractHostY(ABC):
    @abstractmethod
    def build(self):
        ...

    @reducer_method
    def m3(self, state, action):
        return state


class HostZ:
    def m4(self, state, action):
        return state


class ConcreteHostY(AbstractHostY):
    def build(self):
        return None


def _pairs():
    return [
        TypeAndMethod(HostX, HostX.__dict__["m1"].__func__),
        TypeAndMethod(HostX, HostX.m2),
        TypeAndMethod(AbstractHostY, AbstractHostY.m3),
        TypeAndMethod(HostZ, HostZ.m4),
    ]


class StringInspector:
    """Inspector over synthetic (type, method) names."""

    def __init__(self, marked, abstract=()):
        self.marked = dict(marked)
        self.abstract = set(abstract)

    def is_effect(self, candidate_type):
        return False

    def is_effect_wrapper(self, candidate_type):
        return False

    def reducer_marker(self, method):
        return self.marked.get(method)

    def is_abstract(self, candidate_type):
        return candidate_type in self.abstract


# ============================================================================
# Discovery
# ============================================================================

class TestReducerDiscovery:

    def test_scenario_reports_marked_methods(self, recording_options):
        result = discover_reducer_methods(recording_options, _pairs())

        assert [(r.host_class_type, r.method_name) for r in result] == [
            (HostX, "m1"),
            (HostX, "m2"),
            (AbstractHostY, "m3"),
        ]

    def test_scenario_registers_each_concrete_host_once(self, recording_options, recording_sink):
        discover_reducer_methods(recording_options, _pairs())

        assert recording_sink.calls == [("by_type", (HostX,))]

    def test_markers_are_carried(self, recording_options):
        result = discover_reducer_methods(recording_options, _pairs())

        assert result[0].reducer_marker == ReducerMethodMarker(Ping)
        assert result[0].action_type is Ping
        assert result[1].action_type is Pong
        assert result[2].action_type is None

    def test_unit_fields(self, recording_options):
        result = discover_reducer_methods(recording_options, _pairs()[:1])

        assert result == [
            DiscoveredReducerMethod(
                host_class_type=HostX,
                reducer_marker=ReducerMethodMarker(Ping),
                method=HostX.__dict__["m1"].__func__,
            )
        ]

    def test_unmarked_methods_are_ignored(self, recording_options, recording_sink):
        result = discover_reducer_methods(recording_options, [TypeAndMethod(HostZ, HostZ.m4)])

        assert result == []
        assert recording_sink.calls == []

    def test_empty_input(self, recording_options, recording_sink):
        assert discover_reducer_methods(recording_options, []) == []
        assert recording_sink.calls == []

    def test_inherited_method_discovered_on_concrete_subclass(self, recording_options, recording_sink):
        # the marker lives on the function, so pairing it with a concrete
        # subclass makes that subclass the host
        pairs = [TypeAndMethod(ConcreteHostY, AbstractHostY.m3)]

        result = discover_reducer_methods(recording_options, pairs)

        assert [r.host_class_type for r in result] == [ConcreteHostY]
        assert recording_sink.registered == [ConcreteHostY]

    def test_override_without_marker_is_not_a_reducer(self, recording_options):
        class Overrides(HostX):
            def m2(self, state, action):
                return state

        pairs = methods_of([Overrides])

        assert discover_reducer_methods(recording_options, pairs) == []


# ============================================================================
# Host ordering
# ============================================================================

class TestHostRegistrationOrder:

    def test_first_seen_order(self, recording_options, recording_sink):
        inspector = StringInspector({
            "b1": ReducerMethodMarker(),
            "a1": ReducerMethodMarker(),
            "b2": ReducerMethodMarker(),
        })
        pairs = [
            TypeAndMethod("B", "b1"),
            TypeAndMethod("A", "a1"),
            TypeAndMethod("B", "b2"),
        ]

        result = discover_reducer_methods(recording_options, pairs, inspector=inspector)

        assert len(result) == 3
        assert recording_sink.registered == ["B", "A"]

    def test_abstract_hosts_skipped(self, recording_options, recording_sink):
        inspector = StringInspector(
            {"m": ReducerMethodMarker(), "n": ReducerMethodMarker()},
            abstract={"Base"},
        )
        pairs = [TypeAndMethod("Base", "m"), TypeAndMethod("Leaf", "n")]

        result = discover_reducer_methods(recording_options, pairs, inspector=inspector)

        assert [r.host_class_type for r in result] == ["Base", "Leaf"]
        assert recording_sink.registered == ["Leaf"]

    def test_hosts_registered_with_active_lifetime(self, options, services):
        options.use_singleton_registration()

        discover_reducer_methods(options, _pairs())

        assert services.get_descriptor(HostX).scope == "singleton"
        assert AbstractHostY not in services
        assert HostZ not in services


# ============================================================================
# Declared methods
# ============================================================================

class TestDeclaredMethods:

    def test_static_and_instance_methods_are_unwrapped(self):
        methods = declared_methods(HostX)

        assert HostX.__dict__["m1"].__func__ in methods
        assert HostX.m2 in methods

    def test_inherited_methods_are_not_declared(self):
        assert declared_methods(ConcreteHostY) == [ConcreteHostY.build]

    def test_methods_of_pairs_type_with_method(self):
        pairs = methods_of([HostZ])
        assert pairs == [TypeAndMethod(HostZ, HostZ.m4)]
