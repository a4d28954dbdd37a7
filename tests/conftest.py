"""Shared fixtures: offscreen Qt application and a fresh editing session."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication

from flipbook.core.session import EditorSession
from flipbook.events import event_bus
from flipbook.models.stroke import Stroke
from flipbook.rendering.renderer import Renderer
from flipbook.rendering.surface import ImageSurface


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def fresh_event_bus():
    """Each test gets its own EventBus singleton."""
    event_bus._event_bus_instance = None
    yield
    event_bus._event_bus_instance = None


@pytest.fixture
def session():
    return EditorSession()


@pytest.fixture
def surface():
    return ImageSurface(200, 150)


@pytest.fixture
def renderer(surface):
    return Renderer(surface)


@pytest.fixture
def stroke_a():
    return Stroke.from_points([(10, 10), (20, 20), (30, 10)], "#000000", 3)
