import logging
import math
import threading
import time

import numpy as np
import pygame

from .settings import (CHUNK_SIZE, ENABLE_SOUND, FREQ_HIGH, FREQ_LOW, MAX_VOICES,
                       SAMPLE_RATE, SOUND_ATTACK, SOUND_GAIN, SOUND_RELEASE,
                       SOUND_SUSTAIN, TRIGGER_MIN_INTERVAL, VOICE_STEAL_FADE)

log = logging.getLogger(__name__)

# ============================================================
# ====================== SOUND ENGINE ========================
# ============================================================
#
# Each `play(ratio)` spawns a short triangle-wave voice at
#   freq = FREQ_LOW + ratio * (FREQ_HIGH - FREQ_LOW)
# A background thread mixes all live voices chunk by chunk and queues the
# result on one pygame mixer channel.
#
# ENVELOPE: raised-cosine attack and release around a flat sustain, so short
# blips do not click.
#
# VOICE STEALING: past MAX_VOICES the oldest voice is cut to a
# VOICE_STEAL_FADE-sample release.


class _Voice:
    __slots__ = ('freq', 'phase', 'age', 'max_age', 'attack', 'release')

    def __init__(self, freq, max_age, attack, release):
        self.freq    = freq
        self.phase   = 0.0
        self.age     = 0
        self.max_age = max_age
        self.attack  = attack
        self.release = release


def triangle(phases):
    """Triangle wave in [-1, 1] for phases in [0, 1)."""
    return 1.0 - 4.0 * np.abs(phases - 0.5)


def envelope(ages, voice):
    env = np.ones(ages.shape, dtype=np.float64)
    a_mask = ages < voice.attack
    if np.any(a_mask):
        env[a_mask] = 0.5 * (1.0 - np.cos(math.pi * ages[a_mask] / voice.attack))
    rel_start = voice.max_age - voice.release
    r_mask = ages >= rel_start
    if np.any(r_mask):
        env[r_mask] = np.maximum(0.0, 0.5 * (1.0 + np.cos(
            math.pi * (ages[r_mask] - rel_start) / voice.release)))
    env[ages >= voice.max_age] = 0.0
    return env


class SoundEngine:
    """Audio collaborator: fire-and-forget tones, safe to call from any thread."""

    def __init__(self, enabled=ENABLE_SOUND):
        self.enabled      = enabled
        self.sample_rate  = SAMPLE_RATE
        self.chunk_size   = CHUNK_SIZE
        self.sustain_smp  = int(SOUND_SUSTAIN * SAMPLE_RATE)
        self.attack_smp   = max(1, int(SOUND_ATTACK  * SAMPLE_RATE))
        self.release_smp  = max(1, int(SOUND_RELEASE * SAMPLE_RATE))
        self._voices      = []
        self._lock        = threading.Lock()
        self._running     = False
        self._thread      = None
        self._channel     = None
        self._last_play   = 0.0

    def start(self):
        self._channel = pygame.mixer.Channel(1)
        self._running = True
        self._thread  = threading.Thread(target=self._loop, name="sound", daemon=True)
        self._thread.start()

    def stop(self):
        self._running = False
        if self._channel:
            self._channel.stop()

    def play(self, ratio):
        if not (self.enabled and self._running):
            return
        now = time.monotonic()
        if now - self._last_play < TRIGGER_MIN_INTERVAL:
            return
        self._last_play = now
        ratio = max(0.0, min(1.0, float(ratio)))
        voice = _Voice(FREQ_LOW + ratio * (FREQ_HIGH - FREQ_LOW),
                       self.sustain_smp, self.attack_smp, self.release_smp)
        with self._lock:
            if len(self._voices) >= MAX_VOICES:
                oldest = self._voices[0]
                fade = min(VOICE_STEAL_FADE, oldest.release)
                oldest.max_age = oldest.age + fade
                oldest.release = fade
            self._voices.append(voice)

    def _gen_chunk(self) -> np.ndarray:
        buf = np.zeros(self.chunk_size, dtype=np.float64)
        idx = np.arange(self.chunk_size, dtype=np.float64)

        with self._lock:
            alive = []
            for v in self._voices:
                phases = (v.phase + idx * (v.freq / self.sample_rate)) % 1.0
                buf += triangle(phases) * envelope(idx + v.age, v)

                v.phase = (v.phase + self.chunk_size * (v.freq / self.sample_rate)) % 1.0
                v.age  += self.chunk_size
                if v.age < v.max_age:
                    alive.append(v)
            self._voices = alive
            n_voices = max(1, len(alive))

        buf *= SOUND_GAIN / math.sqrt(n_voices)
        return buf

    def _loop(self):
        chunk_secs = self.chunk_size / self.sample_rate
        while self._running:
            pcm    = (np.clip(self._gen_chunk(), -1.0, 1.0) * 32767).astype(np.int16)
            stereo = np.column_stack((pcm, pcm))
            snd    = pygame.mixer.Sound(buffer=stereo.tobytes())
            deadline = time.monotonic() + chunk_secs * 4
            while self._channel.get_queue() is not None and self._running:
                time.sleep(0.001)
                if time.monotonic() > deadline:
                    break
            if self._running:
                self._channel.queue(snd)
            time.sleep(chunk_secs * 0.75)


def init_sound(enabled=ENABLE_SOUND):
    """Open the mixer and start an engine; falls back to a muted one."""
    engine = SoundEngine(enabled)
    try:
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, CHUNK_SIZE)
        pygame.mixer.init()
    except pygame.error as e:
        log.warning("audio unavailable: %s", e)
        engine.enabled = False
        return engine
    engine.start()
    return engine
