import pytest
import sys
from pathlib import Path
from PIL import Image

# Add src to sys.path so we can import report_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from report_toolkit.core.models import ContentBlock, PageGeometry  # noqa: E402


# Common test fixtures
@pytest.fixture
def a4_geometry():
    """A4 portrait, margins 15/15/15/20 -> 180 x 262 content box."""
    return PageGeometry(
        width=210,
        height=297,
        margin_top=15,
        margin_bottom=20,
        margin_left=15,
        margin_right=15,
    )


@pytest.fixture
def block_factory():
    """
    Factory for blocks 180px wide, so on A4 one pixel row is drawn 1 mm
    tall and drawn heights equal pixel heights.
    """
    def _create(height: int, block_id: str = "block", width: int = 180, color="white"):
        return ContentBlock.from_image(block_id, Image.new("RGB", (width, height), color=color))
    return _create


@pytest.fixture
def sample_logo():
    """Square logo; binds on the 22 mm box height."""
    return Image.new("RGB", (200, 200), color="navy")


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (360, 120), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
