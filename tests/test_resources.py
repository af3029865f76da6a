"""Tests for resource models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from provisor.dsl import build_resource
from provisor.errors import ProviderNotFoundError, UnknownResourceTypeError
from provisor.providers import LWRPBase, ProviderLoadCache
from provisor.resources import (
    FileResource,
    LightweightResource,
    LogResource,
    Notification,
    resource_class_for,
)

from .helpers import RecordResource


def test_resource_identity_and_default_action():
    """Test identity string and fallback to the class default action."""
    resource = RecordResource(name="web")

    assert resource.identity == "record[web]"
    assert str(resource) == "record[web]"
    assert resource.actions == ["apply"]


def test_action_accepts_string_or_list():
    """Test that a single action string is coerced to a list."""
    assert RecordResource(name="a", action="reset").actions == ["reset"]
    assert RecordResource(name="b", action=["apply", "reset"]).actions == ["apply", "reset"]


def test_invalid_action_rejected():
    """Test that actions outside allowed_actions fail validation."""
    with pytest.raises(ValidationError, match="not a valid action"):
        RecordResource(name="a", action="explode")


def test_nothing_action_always_allowed():
    """Test that 'nothing' is accepted for every resource type."""
    assert LogResource(name="quiet", action="nothing").actions == ["nothing"]


def test_updated_flags():
    """Test updated_by_last_action and the cumulative updated flag."""
    resource = RecordResource(name="web")
    assert resource.updated is False
    assert resource.updated_by_last_action is False

    resource.set_updated_by_last_action(True)
    assert resource.updated is True
    assert resource.updated_by_last_action is True

    # clearing the last-action flag never clears updated
    resource.set_updated_by_last_action(False)
    assert resource.updated is True
    assert resource.updated_by_last_action is False


def test_notifies_records_notifications():
    """Test notifies() with identity strings and Resource targets."""
    target = RecordResource(name="service")
    resource = RecordResource(name="config")

    result = resource.notifies("reset", target).notifies(
        "apply", "record[cache]", timing="immediate"
    )

    assert result is resource
    assert resource.delayed_notifications == [
        Notification(action="reset", target="record[service]")
    ]
    assert resource.immediate_notifications == [
        Notification(action="apply", target="record[cache]", timing="immediate")
    ]


def test_notifies_rejects_unknown_timing():
    """Test that timing must be delayed or immediate."""
    with pytest.raises(ValidationError):
        RecordResource(name="config").notifies("reset", "record[x]", timing="later")


def test_resource_types_registered_by_name():
    """Test that resource classes are registered by their resource_type."""
    assert resource_class_for("file") is FileResource
    assert resource_class_for("log") is LogResource
    assert resource_class_for("record") is RecordResource
    assert resource_class_for("missing") is None


def test_file_resource_resolves_path(temp_dir):
    """Test FileResource path resolution from name or explicit path."""
    by_name = FileResource(name=str(temp_dir / "motd"))
    by_path = FileResource(name="motd", path=str(temp_dir / "etc" / "motd"))
    relative = FileResource(name="relative.txt")

    assert by_name.resolve_path() == temp_dir / "motd"
    assert by_path.resolve_path() == temp_dir / "etc" / "motd"
    assert relative.resolve_path() == Path.cwd() / "relative.txt"
    assert by_name.actions == ["create"]


def test_file_resource_mode_must_be_octal():
    """Test FileResource mode validation."""
    assert FileResource(name="/tmp/x", mode="0644").mode == "0644"

    with pytest.raises(ValidationError, match="mode must be octal"):
        FileResource(name="/tmp/x", mode="rw-r--r--")


def test_lightweight_resource_free_attributes():
    """Test LightweightResource carries its type name and arbitrary attributes."""
    site = LightweightResource.of_type(
        "webapp_site", "blog", default_action="deploy", port=8080
    )

    assert site.identity == "webapp_site[blog]"
    assert site.port == 8080
    assert site.actions == ["deploy"]
    assert LightweightResource.of_type("webapp_site", "x", action="remove").actions == ["remove"]


def test_build_resource_from_type_name():
    """Test declarations resolve classes by type name."""
    resource = build_resource("record", "web", changes=True)

    assert isinstance(resource, RecordResource)
    assert resource.changes is True


def test_build_resource_falls_back_to_lightweight(load_cache):
    """Test a provider-only type name produces a LightweightResource."""

    def source(provider):
        @provider.action("deploy")
        def deploy(self):
            pass

    LWRPBase.load_once("resources_site", source, cache=load_cache)

    resource = build_resource("resources_site", "blog", docroot="/srv/blog")

    assert isinstance(resource, LightweightResource)
    assert resource.identity == "resources_site[blog]"
    assert resource.docroot == "/srv/blog"
    assert resource.actions == ["deploy"]


def test_build_resource_unknown_type():
    """Test that an unknown type name raises UnknownResourceTypeError."""
    with pytest.raises(UnknownResourceTypeError, match="nope\\[x\\]"):
        build_resource("nope", "x")


def test_provider_class_missing():
    """Test provider resolution fails for a type without a provider."""
    resource = LightweightResource.of_type("unprovided", "x")

    with pytest.raises(ProviderNotFoundError):
        resource.provider_class()
