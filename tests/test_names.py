import pytest

from azzurro import AzzurroFramework, InvalidNameError, ModuleRegistry


@pytest.mark.parametrize("name", ["app", "_ok1", "Shop_2", "caffè", "_"])
def test_valid_module_names_are_accepted(name):
    registry = ModuleRegistry()
    handle = registry.declare(name, [])
    assert handle.name == name


@pytest.mark.parametrize("name", ["1bad", "", "with-dash", "with space", "dot.ted", None, 12])
def test_invalid_module_names_raise(name):
    registry = ModuleRegistry()
    with pytest.raises(InvalidNameError):
        registry.declare(name, [])


def test_invalid_dependency_name_raises():
    af = AzzurroFramework()
    with pytest.raises(InvalidNameError):
        af.module("_ok1", ["2bad"])
    assert not af.registry.has("_ok1")


def test_dependencies_given_as_string_raise():
    af = AzzurroFramework()
    with pytest.raises(InvalidNameError):
        af.module("shop", "auto")


def test_invalid_name_is_a_value_error():
    af = AzzurroFramework()
    with pytest.raises(ValueError):
        af.module("1bad", [])


def test_invalid_app_name_raises_before_registry_changes():
    af = AzzurroFramework()
    with pytest.raises(InvalidNameError):
        af.app("1bad", [])
    assert af.registry.root is None


def test_invalid_service_name_raises():
    af = AzzurroFramework()

    class Cart: ...

    with pytest.raises(InvalidNameError):
        af.module("shop", []).service("shopping-cart", Cart)
