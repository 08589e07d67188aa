import time
import wave
from unittest.mock import MagicMock, patch

from console_derby import audio
from console_derby.audio import MusicPlayer


def _write_wav(path, frames=10_000):
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(8000)
        wav.writeframes(b"\x00\x00" * frames)
    return str(path)


def _fake_stream():
    stream = MagicMock()
    stream.__enter__.return_value = stream
    return stream


def test_play_once_streams_whole_file_in_buffers(tmp_path):
    path = _write_wav(tmp_path / "fanfare.wav")
    stream = _fake_stream()

    with patch.object(audio, "_open_output", return_value=stream) as mock_open:
        MusicPlayer().play_once_blocking(path)

    mock_open.assert_called_once_with(8000, 1, "int16")
    assert stream.write.call_count == 3
    assert sum(len(call.args[0]) for call in stream.write.call_args_list) == 20_000


def test_missing_file_is_reported_and_ignored(tmp_path, capsys):
    MusicPlayer().play_once_blocking(str(tmp_path / "missing.wav"))
    assert "Warning: Music playback failed" in capsys.readouterr().out


def test_no_output_device_is_reported_and_ignored(tmp_path, capsys):
    path = _write_wav(tmp_path / "theme.wav", frames=100)
    with patch.object(audio, "_open_output", side_effect=OSError("PortAudio library not found")):
        MusicPlayer().play_once_blocking(path)
    assert "PortAudio library not found" in capsys.readouterr().out


def test_loop_runs_in_background_until_stopped(tmp_path):
    path = _write_wav(tmp_path / "theme.wav", frames=500)
    stream = _fake_stream()

    with patch.object(audio, "_open_output", return_value=stream):
        player = MusicPlayer()
        player.play_loop(path)
        deadline = time.time() + 2.0
        while stream.write.call_count < 2 and time.time() < deadline:
            time.sleep(0.01)
        player.stop()

    assert stream.write.call_count >= 2
    assert not player.is_playing


def test_failed_loop_ends_its_thread(tmp_path):
    player = MusicPlayer()
    player.play_loop(str(tmp_path / "missing.wav"))
    player._thread.join(2.0)
    assert not player.is_playing
    player.stop()
