# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH   = 1100
WINDOW_HEIGHT  = 680
FPS            = 60

MIN_ARRAY_SIZE     = 2
MAX_ARRAY_SIZE     = 300
DEFAULT_ARRAY_SIZE = 48
RANDOM_VALUE_LOW   = 10
RANDOM_VALUE_HIGH  = 959

# Bogo Sort asks for confirmation above this many elements.
BOGO_SAFE_LIMIT = 8

# ============================================================
# ======================== PACING ============================
# ============================================================
#
# SPEED is an integer in [1, 100]. The per-frame delay in milliseconds is
#   delay = floor((101 - speed) ** PACING_EXPONENT)
# speed 100 is "instant": no suspension at all.
MIN_SPEED       = 1
MAX_SPEED       = 100
DEFAULT_SPEED   = 85
PACING_EXPONENT = 1.4

# Elapsed-time display cadence, in seconds.
ELAPSED_TICK = 0.05

# Confirmation sweep: fixed per-index delay (ms), faster for large arrays.
SWEEP_DELAY_MS       = 10
SWEEP_DELAY_FAST_MS  = 2
SWEEP_FAST_THRESHOLD = 200
SWEEP_SOUND_EVERY    = 4

# ============================================================
# ====================== SOUND SETTINGS ======================
# ============================================================

ENABLE_SOUND  = True
FREQ_LOW      = 200.0
FREQ_HIGH     = 800.0
SAMPLE_RATE   = 44100
CHUNK_SIZE    = 512
TRIGGER_MIN_INTERVAL = 0.02

# A frame only makes a sound if the pacing delay is above this (ms), or with
# probability 1 - SOUND_SAMPLE_CUTOFF otherwise.
SOUND_DELAY_THRESHOLD = 5
SOUND_SAMPLE_CUTOFF   = 0.8

# Tone shape, in seconds. Triangle wave with raised-cosine attack/release.
SOUND_SUSTAIN = 0.05
SOUND_ATTACK  = 0.004
SOUND_RELEASE = 0.020
SOUND_GAIN    = 0.35
MAX_VOICES       = 24
VOICE_STEAL_FADE = 64

# ============================================================
# ========================= UI THEME =========================
# ============================================================

BACKGROUND_COLOR = (5, 5, 10)
BAR_SPACING      = 1
MIN_BAR_HEIGHT   = 3

COMPARE_COLOR = (255, 42, 42)
SWAP_COLOR    = (0, 240, 255)
SETTLED_COLOR = (255, 255, 255)

UI_BG         = (8,   8,  14)
UI_PANEL      = (14, 14,  22)
UI_PANEL2     = (22, 22,  36)
UI_ACCENT     = (255, 55,  55)
UI_TEXT       = (215, 215, 228)
UI_SUBTEXT    = (105, 105, 130)
UI_HOVER      = (30,  22,  38)
UI_SEL_BG     = (50,  12,  12)
UI_SEL_B_BG   = (12,  34,  50)
UI_BORDER     = (38,  38,  58)
UI_SEL_BORDER = (255, 55,  55)
UI_SEL_B_BORDER = (0, 200, 255)
UI_DIM        = (60,  60,  80)
UI_GREEN      = (60, 200, 100)
