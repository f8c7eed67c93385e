"""Tests for the dreamizer-preview-prompts console script."""

from __future__ import annotations

import pytest

from dreamizer.tools import preview_prompts


@pytest.mark.asyncio
async def test_preview_without_key_prints_basic_prompts(test_config, capsys):
    prompts = await preview_prompts.preview(["Opening a bakery", "Sailing"], test_config, delay=0)

    assert prompts == [
        "Medium shot of this character Opening a bakery",
        "Medium shot of this character Sailing",
    ]
    out = capsys.readouterr().out
    assert "Test 1/2" in out
    assert f"Length: {len(prompts[0])} characters" in out


def test_main_uses_sample_dreams(monkeypatch):
    seen = {}

    async def fake_preview(dreams, settings, delay=1.0):
        seen["dreams"] = dreams
        seen["delay"] = delay
        return []

    monkeypatch.setattr(preview_prompts, "preview", fake_preview)
    preview_prompts.main(["--delay", "0"])

    assert seen == {"dreams": preview_prompts.SAMPLE_DREAMS, "delay": 0.0}


def test_main_accepts_dreams(monkeypatch):
    seen = {}

    async def fake_preview(dreams, settings, delay=1.0):
        seen["dreams"] = dreams
        return []

    monkeypatch.setattr(preview_prompts, "preview", fake_preview)
    preview_prompts.main(["Climbing Everest"])

    assert seen["dreams"] == ["Climbing Everest"]
