import pytest

from imgfreq.pipeline import PipelineState, Controls, ViewerSession
from imgfreq.visualization import BufferSink


@pytest.fixture
def sink():
    return BufferSink()


@pytest.fixture
def state(small_config):
    """Zeroed 16 x 16 pipeline state."""
    return PipelineState.initialise(small_config.image.size, small_config.window)


@pytest.fixture
def controls(small_config):
    return Controls.from_config(small_config)


@pytest.fixture
def errors():
    """Collects AcquisitionFailures passed to a session's on_error."""
    return []


@pytest.fixture
def session(small_config, fake_provider, sink, errors):
    """Session on the in-memory provider, not yet started."""
    return ViewerSession(small_config, provider=fake_provider, sink=sink, on_error=errors.append)


@pytest.fixture
def started_session(session):
    """Session after its initial full run."""
    session.start()
    return session
