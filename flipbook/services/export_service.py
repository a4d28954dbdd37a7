"""
Video Export Service - send the animation to the render service

Renders every frame to a PNG data URL on the main thread, then posts the
sequence to the render service from a QThreadPool worker. The editor's
displayed frame is restored as soon as the frames are rendered, whatever
happens to the upload.
"""

import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Tuple

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from ..config import Config
from ..events.event_bus import get_event_bus

if TYPE_CHECKING:
    from ..core.session import EditorSession
    from ..rendering.renderer import Renderer

logger = logging.getLogger(__name__)


def render_frames(session: 'EditorSession', renderer: 'Renderer') -> List[str]:
    """
    Render each frame in timeline order to a PNG data URL.

    The surface is redrawn with the normal editing view afterwards and the
    current frame index is left as it was, even if rendering fails.

    Returns:
        List of 'data:image/png;base64,...' strings
    """
    timeline = session.timeline
    original_index = timeline.current_index
    bus = get_event_bus()
    images = []
    try:
        total = len(timeline)
        for index in range(total):
            renderer.render_strokes(timeline.frame_at(index))
            images.append(renderer.surface.to_data_url())
            bus.update_progress(index + 1, total)
    finally:
        timeline.current_index = original_index
        renderer.redraw(session)
    return images


def request_video(
    frames: List[str],
    fps: int = Config.EXPORT_FPS,
    url: Optional[str] = None,
    timeout: int = Config.EXPORT_TIMEOUT_SEC
) -> Tuple[bool, str, Optional[bytes]]:
    """
    Post a frame sequence to the render service.

    Args:
        frames: PNG data URLs in playback order
        fps: Target frame rate
        url: Service endpoint (defaults to Config.get_render_service_url())
        timeout: Socket timeout in seconds

    Returns:
        Tuple of (success, message, video bytes or None)
    """
    if not frames:
        return False, "No frames to export", None

    url = url or Config.get_render_service_url()
    body = json.dumps({'frames': frames, 'fps': fps}).encode('utf-8')
    req = urllib.request.Request(url, data=body, method='POST')
    req.add_header('Content-Type', 'application/json')
    req.add_header('User-Agent', f'{Config.APP_NAME}/{Config.APP_VERSION}')

    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            if response.status != 200:
                return False, f"Render service returned HTTP {response.status}", None
            video = response.read()
    except urllib.error.HTTPError as e:
        detail = e.read().decode('utf-8', errors='replace').strip()
        return False, f"Render service error {e.code}: {detail or e.reason}", None
    except (urllib.error.URLError, OSError) as e:
        return False, f"Failed to generate video. Is the render service running? ({e})", None

    if not video:
        return False, "Render service returned an empty video", None

    return True, f"Video rendered ({len(video)} bytes)", video


class VideoUploadSignals(QObject):
    """Signals for VideoUploadTask"""

    upload_complete = pyqtSignal(object)  # video bytes
    upload_failed = pyqtSignal(str)


class VideoUploadTask(QRunnable):
    """
    Background task posting rendered frames to the render service

    Usage:
        task = VideoUploadTask(frames, fps)
        task.signals.upload_complete.connect(on_video)
        QThreadPool.globalInstance().start(task)
    """

    def __init__(self, frames: List[str], fps: int = Config.EXPORT_FPS, url: Optional[str] = None):
        super().__init__()
        self.frames = frames
        self.fps = fps
        self.url = url
        self.signals = VideoUploadSignals()

    def run(self):
        success, message, video = request_video(self.frames, self.fps, self.url)
        if success:
            self.signals.upload_complete.emit(video)
        else:
            self.signals.upload_failed.emit(message)


def save_video(video: bytes, output_path: Path) -> Tuple[bool, str]:
    """Write the rendered video to disk."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(video)
    except OSError as e:
        return False, f"Could not write {output_path}: {e}"
    return True, f"Export completed: {output_path}"


class VideoExporter(QObject):
    """
    Runs one export at a time: render frames, upload in the background,
    write the returned video to output_path, report through the EventBus.
    """

    def __init__(self, session: 'EditorSession', renderer: 'Renderer',
                 thread_pool: Optional[QThreadPool] = None, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._session = session
        self._renderer = renderer
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._output_path: Optional[Path] = None
        self._task: Optional[VideoUploadTask] = None

    def is_running(self) -> bool:
        return self._task is not None

    def export(self, output_path: Path, fps: int = Config.EXPORT_FPS, url: Optional[str] = None) -> bool:
        """
        Start an export. Returns False if one is already in flight or the
        frames could not be rendered.
        """
        if self._task is not None:
            return False

        bus = get_event_bus()
        bus.start_export()
        logger.info(f"Exporting {len(self._session.timeline)} frames at {fps} fps")

        try:
            frames = render_frames(self._session, self._renderer)
        except RuntimeError as e:
            logger.error(f"Frame rendering failed: {e}")
            bus.finish_export(False, f"Frame rendering failed: {e}")
            return False

        self._output_path = output_path
        self._task = VideoUploadTask(frames, fps, url)
        self._task.signals.upload_complete.connect(self._on_upload_complete)
        self._task.signals.upload_failed.connect(self._on_upload_failed)
        self._pool.start(self._task)
        return True

    def _on_upload_complete(self, video: bytes):
        success, message = save_video(video, self._output_path)
        self._finish(success, message)

    def _on_upload_failed(self, message: str):
        self._finish(False, message)

    def _finish(self, success: bool, message: str):
        self._task = None
        if success:
            logger.info(message)
        else:
            logger.error(f"Export failed: {message}")
        get_event_bus().finish_export(success, message)


__all__ = [
    'render_frames',
    'request_video',
    'save_video',
    'VideoUploadTask',
    'VideoExporter',
]
