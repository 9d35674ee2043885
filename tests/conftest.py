"""Shared pytest fixtures for StepClock tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from stepclock.audio.alarm import AlarmController
from stepclock.database.db import configure_engine, init_db
from stepclock.timer.engine import CountdownEngine

from helpers import RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def alarm(qapp, sink):
    """AlarmController playing into a recording sink."""
    return AlarmController(sink, parent=None)


@pytest.fixture
def engine(qapp, alarm):
    """Fresh CountdownEngine wired to the recording alarm."""
    return CountdownEngine(parent=None, alarm=alarm)


@pytest.fixture
def engine_no_alarm(qapp):
    """Fresh CountdownEngine with no alarm (pure state-machine tests)."""
    return CountdownEngine(parent=None)
