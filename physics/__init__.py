# ── Central defaults (tune here, not scattered across files) ──

# Spring
STIFFNESS = 0.3
DAMPING = 0.7
REST_POSITION = 200.0

# Body
INITIAL_POSITION = 30.0
INVERSE_MASS = 1 / 4

# Clock
STEP_MS = 10.0
MAX_CATCHUP_STEPS = 50

# Driver / demo
FRAME_MS = 16.7
FRAME_JITTER_MS = 4.0
N_FRAMES = 600
SEED = 42
