"""
Registration sinks: scoped, singleton, and lifetime lookup.
"""

import pytest

from fluxor.di import ServiceCollection, ServiceScope
from fluxor.dependency_injection import (
    RegistrationSink,
    ScopedRegistration,
    SingletonRegistration,
    registration_for,
)


class Greeter:
    pass


class LoudGreeter(Greeter):
    pass


# ============================================================================
# Sinks
# ============================================================================

class TestLifetimeSinks:

    @pytest.mark.parametrize("sink_cls,scope", [
        (ScopedRegistration, "request"),
        (SingletonRegistration, "singleton"),
    ])
    def test_all_three_capabilities_share_one_lifetime(self, sink_cls, scope):
        services = ServiceCollection()
        sink = sink_cls(services)

        sink.by_type(Greeter)
        sink.by_type_and_implementation(LoudGreeter, LoudGreeter)
        sink.by_factory("greeting", lambda container: "hi")

        assert sink.scope == scope
        assert [d.scope for d in services] == [scope, scope, scope]

    def test_by_type_and_implementation(self):
        services = ServiceCollection()
        SingletonRegistration(services).by_type_and_implementation(Greeter, LoudGreeter)

        assert isinstance(services.build_container().resolve(Greeter), LoudGreeter)

    def test_by_factory_receives_container(self):
        services = ServiceCollection()
        SingletonRegistration(services).by_factory(Greeter, lambda container: LoudGreeter())

        assert isinstance(services.build_container().resolve(Greeter), LoudGreeter)

    def test_sinks_satisfy_protocol(self):
        services = ServiceCollection()
        assert isinstance(ScopedRegistration(services), RegistrationSink)
        assert isinstance(SingletonRegistration(services), RegistrationSink)

    def test_repr(self):
        assert repr(ScopedRegistration(ServiceCollection())) == "ScopedRegistration(scope='request')"


# ============================================================================
# registration_for
# ============================================================================

class TestRegistrationFor:

    @pytest.mark.parametrize("lifetime,expected", [
        ("scoped", ScopedRegistration),
        ("request", ScopedRegistration),
        ("singleton", SingletonRegistration),
        (ServiceScope.SINGLETON, SingletonRegistration),
    ])
    def test_known_lifetimes(self, lifetime, expected):
        assert type(registration_for(ServiceCollection(), lifetime)) is expected

    def test_transient_has_no_strategy(self):
        with pytest.raises(ValueError, match="No registration strategy"):
            registration_for(ServiceCollection(), "transient")

    def test_unknown_lifetime(self):
        with pytest.raises(ValueError):
            registration_for(ServiceCollection(), "forever")
