"""Tests for the audio devices."""

from __future__ import annotations

import pytest

from pychip8.audio import SilentAudio


def test_silent_audio_is_idempotent() -> None:
    audio = SilentAudio()

    audio.start()
    audio.start()
    assert audio.is_active()
    assert audio.start_count == 1

    audio.stop()
    audio.stop()
    assert not audio.is_active()
    assert audio.stop_count == 1


def test_beeper_requires_initialised_mixer() -> None:
    pygame = pytest.importorskip("pygame")
    from pychip8.audio import SquareWaveBeeper

    if pygame.mixer.get_init() is not None:
        pygame.mixer.quit()

    with pytest.raises(RuntimeError):
        SquareWaveBeeper()
