"""
Constants and configuration defaults for the glTF Clip Baker addon.
"""

# Version number
version = 1.0

# Prefix for console diagnostics
LOG_PREFIX = "glTF Clip Baker: "

# Transforms whose axes deviate more than this (cosine between axes) are
# reported as not representable by a TRS triple.
MAX_NON_ORTHOGONALITY = 0.01

# How many offending sample times are kept per node for the shear warning
MAX_INVALID_TRANSFORM_TIMES = 10

# Progress is reported once every this many frames
PROGRESS_FRAME_INTERVAL = 10

# Constant channel detection thresholds
DEFAULT_TRANSLATION_THRESHOLD = 1e-4
DEFAULT_ROTATION_THRESHOLD = 1e-5
DEFAULT_SCALING_THRESHOLD = 1e-5
DEFAULT_WEIGHTS_THRESHOLD = 1e-5

# Step detection is disabled at 1 (curve simplification is not implemented)
DEFAULT_STEP_DETECT_SAMPLE_COUNT = 1

DEFAULT_FRAMES_PER_SECOND = 24.0

# glTF accessor component type for float32
GLTF_FLOAT = 5126
