"""Tests for the Flask render service (FFmpeg is faked)."""

import base64
import subprocess
from pathlib import Path

import cv2
import numpy as np
import pytest

from flipbook.services import render_server
from flipbook.services.render_server import RenderJobError, create_app, decode_frame


def png_data_url(width=8, height=6):
    ok, encoded = cv2.imencode(".png", np.full((height, width, 3), 255, np.uint8))
    assert ok
    return "data:image/png;base64," + base64.b64encode(encoded.tobytes()).decode("ascii")


@pytest.fixture
def work_root(tmp_path):
    root = tmp_path / "jobs"
    root.mkdir()
    return root


@pytest.fixture
def client(work_root, monkeypatch):
    monkeypatch.setattr(render_server, "find_ffmpeg", lambda: Path("ffmpeg"))
    app = create_app(work_root)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def ffmpeg_calls(monkeypatch):
    """Fake FFmpeg that records the command and job folder contents."""
    calls = []

    def fake_run(cmd, **kwargs):
        output = Path(cmd[-1])
        calls.append({
            "cmd": cmd,
            "files": sorted(p.name for p in output.parent.iterdir()),
        })
        output.write_bytes(b"fake-mp4")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(render_server.subprocess, "run", fake_run)
    return calls


def test_render_returns_video(client, ffmpeg_calls, work_root):
    response = client.post("/render-video", json={"frames": [png_data_url(), png_data_url()], "fps": 10})

    assert response.status_code == 200
    assert response.data == b"fake-mp4"
    assert response.mimetype == "video/mp4"
    assert "my-animation.mp4" in response.headers["Content-Disposition"]

    call = ffmpeg_calls[0]
    assert call["files"] == ["frame-000.png", "frame-001.png"]
    cmd = call["cmd"]
    assert cmd[cmd.index("-framerate") + 1] == "10"
    assert cmd[cmd.index("-c:v") + 1] == "libx264"
    assert cmd[cmd.index("-pix_fmt") + 1] == "yuv420p"
    assert "+faststart" in cmd

    assert list(work_root.iterdir()) == []


def test_job_folder_name(client, ffmpeg_calls):
    client.post("/render-video", json={"frames": [png_data_url()], "fps": 10})
    job_dir = Path(ffmpeg_calls[0]["cmd"][-1]).parent
    assert job_dir.name.startswith("job-")


@pytest.mark.parametrize("body", [{"frames": []}, {}, None])
def test_no_frames(client, body):
    response = client.post("/render-video", json=body)
    assert response.status_code == 400
    assert response.data == b"No frames provided"


def test_invalid_fps(client):
    response = client.post("/render-video", json={"frames": [png_data_url()], "fps": -1})
    assert response.status_code == 400


def test_encoder_failure_cleans_up(client, work_root, monkeypatch):
    monkeypatch.setattr(
        render_server.subprocess, "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, stdout="", stderr="boom")
    )
    response = client.post("/render-video", json={"frames": [png_data_url()], "fps": 10})
    assert response.status_code == 500
    assert response.data == b"Video generation failed"
    assert list(work_root.iterdir()) == []


def test_undecodable_frame(client, ffmpeg_calls, work_root):
    response = client.post("/render-video", json={"frames": ["data:image/png;base64,not-png!"]})
    assert response.status_code == 400
    assert ffmpeg_calls == []
    assert list(work_root.iterdir()) == []


def test_mismatched_frame_sizes(client, ffmpeg_calls, work_root):
    frames = [png_data_url(8, 6), png_data_url(10, 6)]
    response = client.post("/render-video", json={"frames": frames, "fps": 10})
    assert response.status_code == 400
    assert list(work_root.iterdir()) == []


def test_missing_ffmpeg(work_root, monkeypatch):
    monkeypatch.setattr(render_server, "find_ffmpeg", lambda: None)
    client = create_app(work_root).test_client()
    response = client.post("/render-video", json={"frames": [png_data_url()], "fps": 10})
    assert response.status_code == 500


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "ffmpeg": True}


def test_decode_frame_accepts_bare_base64():
    data_url = png_data_url(4, 3)
    image = decode_frame(data_url.split(",", 1)[1])
    assert image.shape[:2] == (3, 4)


def test_decode_frame_rejects_non_image():
    payload = base64.b64encode(b"hello").decode("ascii")
    with pytest.raises(RenderJobError) as excinfo:
        decode_frame(payload)
    assert excinfo.value.status == 400


@pytest.mark.parametrize("fps", [0, True, "10", 2.5])
def test_rejects_bad_fps(client, ffmpeg_calls, fps):
    response = client.post("/render-video", json={"frames": [png_data_url()], "fps": fps})
    assert response.status_code == 400
    assert ffmpeg_calls == []


@pytest.mark.parametrize("frames", [[123], [png_data_url(), None], "data:image/png;base64,AAAA"])
def test_rejects_non_string_frames(client, ffmpeg_calls, work_root, frames):
    response = client.post("/render-video", json={"frames": frames, "fps": 10})
    assert response.status_code == 400
    assert ffmpeg_calls == []
    assert list(work_root.iterdir()) == []


def test_bad_input_rejected_without_ffmpeg(work_root, monkeypatch):
    monkeypatch.setattr(render_server, "find_ffmpeg", lambda: None)
    client = create_app(work_root).test_client()
    response = client.post("/render-video", json={"frames": [123], "fps": 10})
    assert response.status_code == 400


def test_non_object_body(client):
    response = client.post("/render-video", json=[png_data_url()])
    assert response.status_code == 400
    assert response.data == b"No frames provided"
