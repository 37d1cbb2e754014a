"""
Baking of whole clips: drives the scene's time cursor over the frame grid and
samples every exportable node at each frame.
"""

from typing import Callable, List, Optional

from ..core.constants import PROGRESS_FRAME_INTERVAL
from ..core.types import AnimClipArg, AnimationClip, BakeArguments
from ..core.utils import log_info
from .frames import FrameGrid
from .node_animation import NodeAnimationSampler
from .transform_cache import TransformCache


ProgressCallback = Callable[[str], None]


class ClipBaker:
    """Bakes one clip of `scene` into an AnimationClip.

    Arguments are validated and the frame grid is built up front, so invalid
    settings fail before the scene is touched.
    """

    def __init__(
        self,
        arguments: BakeArguments,
        clip_arg: AnimClipArg,
        scene,
        progress: Optional[ProgressCallback] = None,
    ):
        self.arguments = arguments
        self.clip_arg = clip_arg
        self.scene = scene
        self.progress = progress or log_info

        arguments.validate()
        self.frames = FrameGrid.build(
            clip_arg.frame_count,
            clip_arg.frames_per_second,
            arguments.make_name(f"{clip_arg.name}/anim/frames"),
        )
        self.clip = AnimationClip(name=clip_arg.name, frames_name=self.frames.name)

        self.node_animations: List[NodeAnimationSampler] = []
        for node in scene.exportable_nodes():
            if not node.animatable:
                continue
            self.node_animations.append(NodeAnimationSampler(node, self.frames, scene, arguments))

    def bake(self) -> AnimationClip:
        clip_arg = self.clip_arg
        frame_count = self.frames.count

        for frame_index, relative_time in enumerate(self.frames.times):
            absolute_time = clip_arg.start_time + relative_time
            self.scene.advance_time_to(absolute_time, redraw=self.arguments.redraw_viewport)

            transform_cache = TransformCache(self.scene)
            for node_animation in self.node_animations:
                node_animation.sample_at(absolute_time, frame_index, transform_cache)

            if frame_index % PROGRESS_FRAME_INTERVAL == PROGRESS_FRAME_INTERVAL - 1:
                self.progress(f"exporting clip '{clip_arg.name}' {frame_index * 100 // frame_count}%")

        for node_animation in self.node_animations:
            node_animation.export_to(self.clip)

        return self.clip


def bake_clip(
    arguments: BakeArguments,
    clip_arg: AnimClipArg,
    scene,
    progress: Optional[ProgressCallback] = None,
) -> AnimationClip:
    return ClipBaker(arguments, clip_arg, scene, progress).bake()


def bake_clips(arguments: BakeArguments, scene, progress: Optional[ProgressCallback] = None) -> List[AnimationClip]:
    """Bake every clip of `arguments.clips`, in order"""
    arguments.validate()
    return [bake_clip(arguments, clip_arg, scene, progress) for clip_arg in arguments.clips]
