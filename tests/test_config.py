"""Tests for deployment context and environment resolution."""

from __future__ import annotations

import pytest

from imsauth.config import DeploymentContext, resolve_environment
from imsauth.models import ImsEnvironment


# ---------------------------------------------------------------------------
# DeploymentContext
# ---------------------------------------------------------------------------


class TestDeploymentContext:
    def test_from_env_reads_namespace(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("__OW_NAMESPACE", "development-12345")
        assert DeploymentContext.from_env().namespace == "development-12345"

    def test_from_env_unset(self) -> None:
        assert DeploymentContext.from_env().namespace is None

    def test_from_env_explicit_mapping(self) -> None:
        ctx = DeploymentContext.from_env({"__OW_NAMESPACE": "development-x"})
        assert ctx.is_development

    def test_from_env_empty_value_is_none(self) -> None:
        assert DeploymentContext.from_env({"__OW_NAMESPACE": ""}).namespace is None

    @pytest.mark.parametrize(
        ("namespace", "expected"),
        [
            ("development-12345", ImsEnvironment.STAGE),
            ("development-", ImsEnvironment.STAGE),
            ("production-12345", ImsEnvironment.PROD),
            ("my-development-ns", ImsEnvironment.PROD),
            (None, ImsEnvironment.PROD),
        ],
    )
    def test_default_environment(self, namespace, expected) -> None:
        assert DeploymentContext(namespace=namespace).default_environment() is expected


# ---------------------------------------------------------------------------
# resolve_environment
# ---------------------------------------------------------------------------


class TestResolveEnvironment:
    dev = DeploymentContext(namespace="development-1")

    def test_explicit_wins(self) -> None:
        assert resolve_environment("prod", "stage", self.dev) is ImsEnvironment.PROD

    def test_hint_beats_context(self) -> None:
        assert resolve_environment(None, "prod", self.dev) is ImsEnvironment.PROD

    def test_context_used_without_explicit_or_hint(self) -> None:
        assert resolve_environment(None, None, self.dev) is ImsEnvironment.STAGE

    def test_empty_string_falls_through(self) -> None:
        assert resolve_environment("", "", self.dev) is ImsEnvironment.STAGE

    def test_nothing_given_is_prod(self) -> None:
        assert resolve_environment() is ImsEnvironment.PROD

    def test_unknown_explicit_value_is_prod(self) -> None:
        assert resolve_environment("qa", None, self.dev) is ImsEnvironment.PROD

    def test_enum_values_accepted(self) -> None:
        assert resolve_environment(ImsEnvironment.STAGE) is ImsEnvironment.STAGE


class TestImsEnvironmentParse:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("stage", ImsEnvironment.STAGE),
            ("STAGE", ImsEnvironment.STAGE),
            ("prod", ImsEnvironment.PROD),
            ("invalid", ImsEnvironment.PROD),
            (None, ImsEnvironment.PROD),
            (42, ImsEnvironment.PROD),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert ImsEnvironment.parse(value) is expected
