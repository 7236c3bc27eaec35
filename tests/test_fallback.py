from __future__ import annotations

import pytest

from vng.errors import RemoteCallError
from vng.services import AnalysisResult, ImageRequest, KeyFallback
from vng.services.base import FallbackImageSynthesizer, FallbackTextAnalyzer

from conftest import FakeAnalyzer, FakeImages


def test_primary_key_success_does_not_touch_fallback() -> None:
    built = []

    def build(key: str) -> FakeAnalyzer:
        built.append(key)
        return FakeAnalyzer(AnalysisResult(text="ok"))

    analyzer = FallbackTextAnalyzer(KeyFallback(build, ["k1", "k2"], service="gemini"))

    assert analyzer.analyze("hello").text == "ok"
    assert built == ["k1"]


def test_falls_back_exactly_once() -> None:
    built = []

    def build(key: str) -> FakeAnalyzer:
        built.append(key)
        return FakeAnalyzer(error=RemoteCallError(f"{key} failed", service="gemini"))

    analyzer = FallbackTextAnalyzer(KeyFallback(build, ["k1", "k2", "k3"], service="gemini"))

    with pytest.raises(RemoteCallError, match="k2 failed"):
        analyzer.analyze("hello")
    assert built == ["k1", "k2"]


def test_fallback_key_rescues_image_generation() -> None:
    def build(key: str) -> FakeImages:
        if key == "bad":
            return FakeImages(error=RemoteCallError("401", service="openai", status_code=401))
        return FakeImages()

    images = FallbackImageSynthesizer(KeyFallback(build, ["bad", "good"], service="openai"))

    assert images.generate(ImageRequest(prompt="p", style="s", palette="c")) == "https://cdn.test/image-1.png"


def test_single_key_failure_propagates() -> None:
    analyzer = FallbackTextAnalyzer(KeyFallback(
        lambda key: FakeAnalyzer(error=RemoteCallError("down")), ["only"], service="gemini",
    ))

    with pytest.raises(RemoteCallError, match="down"):
        analyzer.analyze("hello")


def test_no_keys_is_a_remote_error() -> None:
    analyzer = FallbackTextAnalyzer(KeyFallback(lambda key: FakeAnalyzer(), [], service="gemini"))

    with pytest.raises(RemoteCallError, match="No API key configured for gemini"):
        analyzer.analyze("hello")


def test_non_remote_errors_are_not_retried() -> None:
    built = []

    def build(key: str) -> FakeAnalyzer:
        built.append(key)
        return FakeAnalyzer(error=ValueError("bug"))

    analyzer = FallbackTextAnalyzer(KeyFallback(build, ["k1", "k2"], service="gemini"))

    with pytest.raises(ValueError):
        analyzer.analyze("hello")
    assert built == ["k1"]
