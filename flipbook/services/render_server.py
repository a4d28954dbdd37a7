"""
Render Service - turns an uploaded PNG frame sequence into an MP4

Small Flask app the editor's export posts to. Each request gets its own
working folder holding the decoded frames and the encoded video; the folder
is removed when the request ends, whether encoding worked or not.

Run:
    flipbook-render-server --port 3000
"""

import argparse
import base64
import binascii
import io
import logging
import re
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np
from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

from ..config import Config
from ..utils.logging_config import LoggingConfig

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r'^data:image/png;base64,')
FRAME_PATTERN = 'frame-%03d.png'


class RenderJobError(Exception):
    """Raised when a render job cannot produce a video."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.status = status


def find_ffmpeg() -> Optional[Path]:
    """
    Find FFmpeg executable.

    Checks:
    1. System PATH
    2. Common installation locations (Windows)

    Returns:
        Path to ffmpeg executable, or None if not found
    """
    ffmpeg_path = shutil.which('ffmpeg')
    if ffmpeg_path:
        return Path(ffmpeg_path)

    if sys.platform == 'win32':
        common_paths = [
            Path(r'C:\ffmpeg\bin\ffmpeg.exe'),
            Path(r'C:\Program Files\ffmpeg\bin\ffmpeg.exe'),
            Path.home() / 'ffmpeg' / 'bin' / 'ffmpeg.exe',
        ]
        for path in common_paths:
            if path.exists():
                return path

    return None


def decode_frame(data_url: str) -> np.ndarray:
    """
    Decode one data-URL PNG into a BGR(A) image array.

    Raises:
        RenderJobError: (400) if the payload is not a decodable image
    """
    if not isinstance(data_url, str):
        raise RenderJobError("Frame must be a data URL string", status=400)

    payload = DATA_URL_PREFIX.sub('', data_url)
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise RenderJobError(f"Frame is not valid base64: {e}", status=400)

    image = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise RenderJobError("Frame is not a decodable image", status=400)
    return image


def decode_frames(frames: List[str]) -> List[np.ndarray]:
    """
    Decode every frame, checking they all share the first frame's size
    (the encoder needs a constant resolution).

    Raises:
        RenderJobError: (400) on the first bad frame
    """
    images = []
    size = None
    for index, data_url in enumerate(frames):
        image = decode_frame(data_url)
        if size is None:
            size = image.shape[:2]
        elif image.shape[:2] != size:
            raise RenderJobError(
                f"Frame {index} is {image.shape[1]}x{image.shape[0]}, "
                f"expected {size[1]}x{size[0]}",
                status=400
            )
        images.append(image)
    return images


def write_frames(images: List[np.ndarray], job_dir: Path) -> int:
    """
    Write images as frame-000.png, frame-001.png, ... into job_dir.

    Returns:
        Number of frames written
    """
    for index, image in enumerate(images):
        if not cv2.imwrite(str(job_dir / (FRAME_PATTERN % index)), image):
            raise RenderJobError(f"Could not write frame {index}")
    return len(images)


def encode_video(job_dir: Path, output_path: Path, fps: int, ffmpeg_path: Path):
    """
    Encode the job's PNG sequence to H.264 MP4 with FFmpeg.

    Raises:
        RenderJobError: if FFmpeg fails, times out, or writes nothing
    """
    cmd = [
        str(ffmpeg_path),
        '-y',  # Overwrite output
        '-framerate', str(fps),
        '-i', str(job_dir / FRAME_PATTERN),
        '-c:v', 'libx264',
        '-pix_fmt', 'yuv420p',
        '-movflags', '+faststart',
        str(output_path)
    ]

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=Config.FFMPEG_TIMEOUT_SEC
        )
    except subprocess.TimeoutExpired:
        raise RenderJobError("FFmpeg encoding timed out")
    except OSError as e:
        raise RenderJobError(f"FFmpeg execution failed: {e}")

    if result.returncode != 0:
        error_msg = result.stderr[-500:] if result.stderr else "Unknown error"
        raise RenderJobError(f"FFmpeg encoding failed:\n{error_msg}")

    if not output_path.exists():
        raise RenderJobError("Output file was not created")


def render_video(frames: List[str], fps: int, work_root: Optional[Path] = None) -> bytes:
    """
    Run one render job and return the MP4 bytes.

    Args:
        frames: PNG data URLs in playback order
        fps: Output frame rate
        work_root: Parent folder for job folders (system temp if None)

    Raises:
        RenderJobError: on any failure; the job folder is removed regardless
    """
    if not frames:
        raise RenderJobError("No frames provided", status=400)
    if isinstance(fps, bool) or not isinstance(fps, int) or fps <= 0:
        raise RenderJobError("fps must be a positive integer", status=400)

    images = decode_frames(frames)

    ffmpeg_path = find_ffmpeg()
    if ffmpeg_path is None:
        raise RenderJobError("FFmpeg not found on the render host")

    job_dir = Path(tempfile.mkdtemp(prefix=Config.RENDER_JOB_PREFIX,
                                    dir=str(work_root) if work_root else None))
    try:
        count = write_frames(images, job_dir)
        output_path = job_dir / f"animation-{job_dir.name}.mp4"
        encode_video(job_dir, output_path, fps, ffmpeg_path)
        logger.info(f"Video rendering complete: {count} frames at {fps} fps")
        return output_path.read_bytes()
    finally:
        shutil.rmtree(job_dir, ignore_errors=True)


def create_app(work_root: Optional[Path] = None) -> Flask:
    """Build the render service Flask app."""
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = Config.RENDER_MAX_CONTENT_MB * 1024 * 1024
    CORS(app)

    @app.route(Config.RENDER_SERVICE_PATH, methods=['POST'])
    def render_video_route():
        """Encode posted frames: {"frames": [data URLs], "fps": int}."""
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            body = {}
        frames = body.get('frames')
        fps = body.get('fps', Config.EXPORT_FPS)

        if not frames:
            return "No frames provided", 400
        if not isinstance(frames, list):
            return "frames must be a list of data URLs", 400

        try:
            video = render_video(frames, fps, work_root)
        except RenderJobError as e:
            if e.status == 400:
                logger.warning(f"Rejected render job: {e}")
                return str(e), 400
            logger.error(f"Render job failed: {e}")
            return "Video generation failed", e.status

        return send_file(
            io.BytesIO(video),
            mimetype='video/mp4',
            as_attachment=True,
            download_name=Config.RENDER_DOWNLOAD_NAME
        )

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok", "ffmpeg": find_ffmpeg() is not None})

    return app


def main(argv: Optional[List[str]] = None):
    """Command line entry point for the render service."""
    parser = argparse.ArgumentParser(description="Flipbook render service")
    parser.add_argument('--host', default=Config.RENDER_SERVICE_HOST)
    parser.add_argument('--port', type=int, default=Config.RENDER_SERVICE_PORT)
    parser.add_argument('--work-dir', type=Path, default=None,
                        help="Folder for temporary job folders")
    args = parser.parse_args(argv)

    LoggingConfig.setup_logging()
    if find_ffmpeg() is None:
        logger.warning("FFmpeg not found; render requests will fail until it is installed")

    app = create_app(args.work_dir)
    logger.info(f"Server running on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port)


if __name__ == '__main__':
    main()
