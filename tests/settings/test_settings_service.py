import pytest

from designflow.core.exceptions import ValidationError


def test_variation_points_default_to_five(container, repos):
    repos.settings.settings = None

    assert container.settings_service.variation_points() == 5
    assert container.settings_service.get_settings() is None


def test_update_is_partial(container):
    container.settings_service.update(logo_url="https://cdn/logo.png")
    container.settings_service.update(variation_points="7")

    s = container.settings_service.get_settings()
    assert s.logo_url == "https://cdn/logo.png"
    assert s.brand_title == "DesignFlow Pro"
    assert container.settings_service.variation_points() == 7


def test_variation_points_validation(container):
    with pytest.raises(ValidationError):
        container.settings_service.update(variation_points=-3)
