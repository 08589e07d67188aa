"""
Background music for race day.

Playback runs on its own daemon thread and shares exactly one thing with the
race: a stop event checked between buffer writes. Any failure (missing file,
unsupported format, no output device) is printed and the music just stops.
"""

from __future__ import annotations

import threading
import wave
from typing import Optional

FRAMES_PER_BUFFER = 4096

SAMPLE_WIDTH_DTYPES = {
    1: "uint8",
    2: "int16",
    3: "int24",
    4: "int32",
}


def _open_output(samplerate: int, channels: int, dtype: str):
    # Deferred so a machine without PortAudio can still race in silence.
    import sounddevice as sd

    return sd.RawOutputStream(samplerate=samplerate, channels=channels, dtype=dtype)


class MusicPlayer:
    def __init__(self) -> None:
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def is_playing(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def play_loop(self, path: str) -> None:
        """Starts looping `path` in the background until stop() is called."""
        self.stop()
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, args=(path,), name="derby-music", daemon=True)
        self._thread.start()

    def play_once_blocking(self, path: str) -> None:
        self._stop_event.clear()
        self._stream_file(path)

    def stop(self, timeout: float = 1.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _loop(self, path: str) -> None:
        while not self._stop_event.is_set():
            if not self._stream_file(path):
                break

    def _stream_file(self, path: str) -> bool:
        """Plays one pass of the file. Returns False when playback failed."""
        try:
            with wave.open(path, 'rb') as wav:
                dtype = SAMPLE_WIDTH_DTYPES.get(wav.getsampwidth())
                if dtype is None:
                    raise wave.Error(f"unsupported sample width {wav.getsampwidth()}")
                with _open_output(wav.getframerate(), wav.getnchannels(), dtype) as stream:
                    while not self._stop_event.is_set():
                        data = wav.readframes(FRAMES_PER_BUFFER)
                        if not data:
                            break
                        stream.write(data)
            return True
        except Exception as e:
            print(f"Warning: Music playback failed for {path}: {e}")
            return False
