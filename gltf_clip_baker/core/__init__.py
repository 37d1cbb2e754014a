"""
Core module for the glTF Clip Baker addon.

This module contains shared utilities, constants, data structures and the
transform decomposition used throughout the addon.
"""

from .constants import (
    version, LOG_PREFIX,
    MAX_NON_ORTHOGONALITY, MAX_INVALID_TRANSFORM_TIMES, PROGRESS_FRAME_INTERVAL,
)
from .utils import *
from .types import *
from .transform import *

__all__ = [
    # Constants
    'version', 'LOG_PREFIX',
    'MAX_NON_ORTHOGONALITY', 'MAX_INVALID_TRANSFORM_TIMES', 'PROGRESS_FRAME_INTERVAL',

    # Utilities
    'log_info', 'log_warning', 'to_matrix', 'format_times',

    # Types
    'BakeConfigurationError', 'TransformKind', 'NodeRole', 'ChannelPath',
    'ExportableNode', 'AnimClipArg', 'BakeArguments', 'AnimationChannel',
    'AnimationClip',

    # Transforms
    'TRS', 'IDENTITY_TRS', 'SampledTransformState', 'non_orthogonality',
    'trs_from_matrix', 'decompose_transform',
]
