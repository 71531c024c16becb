"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from qa.util.di import PROVIDERS, Component, get_provider


def build_test_container(
    unmock: set[Component] | None = None,
    overrides: list[Provider] | None = None,
    http: bool = False,
) -> AsyncContainer:
    """Build test container with selective unmocking.

    Args:
        unmock: Components to use production implementations for.
                All others use mocks if available.
        overrides: Extra providers registered last, so they replace
                   earlier registrations (e.g. settings for one test).
        http: Include FastapiProvider, for containers served by a TestClient

    Returns:
        Configured test container

    Raises:
        ValueError: If unknown components are requested

    Examples:
        # Unit tests - in-memory persistence
        container = build_test_container()

        # Integration tests - real persistence, assumes postgres running
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    _validate_unmock(unmock)

    provider_instances = []
    for base in PROVIDERS:
        is_mockable = bool(base.__subclasses__())

        if not is_mockable:
            # Concrete provider - always use as-is
            provider_class = get_provider(base, use_mock=False)
        else:
            component_name = getattr(base, "__mock_component__", None)
            use_mock = component_name not in unmock if component_name else False
            provider_class = get_provider(base, use_mock=use_mock)

        # All providers instantiated without arguments (Settings comes from DI)
        provider_instances.append(provider_class())

    if http:
        provider_instances.append(FastapiProvider())
    provider_instances.extend(overrides or [])

    return make_async_container(*provider_instances)


def _validate_unmock(unmock: set[Component]) -> None:
    """Reject components that have no mockable provider."""
    mockable_providers = [p for p in PROVIDERS if p.__subclasses__()]
    all_components = {
        getattr(p, "__mock_component__")
        for p in mockable_providers
        if hasattr(p, "__mock_component__")
    }

    unknown = unmock - all_components
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")
