"""Tests for infrastructure/capabilities.py."""

from __future__ import annotations

import importlib.metadata
import types

import pytest

from tracepack.domain.model.configuration import ResolverConfig
from tracepack.infrastructure import capabilities as capabilities_module
from tracepack.infrastructure.capabilities import Capabilities, DistributionIndex, DistributionRef


class TestProbe:
    """Tests for Capabilities.probe."""

    def test_default_probe(self) -> None:
        caps = Capabilities.probe()
        assert caps.has_caller_lookup
        assert caps.has_distributions

    def test_caller_lookup_disabled(self) -> None:
        caps = Capabilities.probe(ResolverConfig(use_caller_lookup=False))
        assert not caps.has_caller_lookup
        assert caps.has_distributions

    def test_distributions_disabled(self) -> None:
        caps = Capabilities.probe(ResolverConfig(use_distributions=False))
        assert caps.has_caller_lookup
        assert not caps.has_distributions

    def test_missing_getframe(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(capabilities_module, "sys", types.SimpleNamespace())
        assert not Capabilities.probe().has_caller_lookup

    def test_failing_metadata(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken() -> dict[str, list[str]]:
            raise OSError("unreadable site-packages")

        monkeypatch.setattr(importlib.metadata, "packages_distributions", broken)
        assert not Capabilities.probe().has_distributions

    def test_empty_capabilities(self) -> None:
        caps = Capabilities()
        assert not caps.has_caller_lookup
        assert not caps.has_distributions

    def test_probed_lookup_finds_caller(self) -> None:
        caps = Capabilities.probe(ResolverConfig(use_distributions=False))
        assert caps.caller_lookup is not None
        assert caps.caller_lookup(0) is type(self)


class TestDistributionIndex:
    """Tests for DistributionIndex."""

    def test_normalizes_names(self) -> None:
        index = DistributionIndex({"pkg": ["b", "a", "b"], "empty": []})
        assert len(index) == 1
        assert index.distributions_for("pkg.sub.mod") == ("a", "b")
        assert index.distributions_for("empty") == ()

    def test_unknown_module(self) -> None:
        assert DistributionIndex({}).lookup("json.decoder") is None

    def test_lookup_installed(self) -> None:
        index = DistributionIndex({"_pytest": ["pytest"]})

        ref = index.lookup("_pytest.runner")

        assert ref == DistributionRef(name="pytest", version=importlib.metadata.version("pytest"))

    def test_stale_index_raises(self) -> None:
        index = DistributionIndex({"ghost": ["no-such-distribution-tp"]})
        with pytest.raises(importlib.metadata.PackageNotFoundError):
            index.lookup("ghost")

    def test_shared_package_prefers_owning_distribution(self) -> None:
        import _pytest.runner

        index = DistributionIndex({"_pytest": ["pytest", "zz-not-owner"]})

        ref = index.lookup("_pytest.runner", _pytest.runner.__file__)

        assert ref is not None
        assert ref.name == "pytest"

    def test_from_metadata_knows_pytest(self) -> None:
        assert "pytest" in DistributionIndex.from_metadata().distributions_for("_pytest")
