import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add the project root to the Python path
root_path = str(Path(__file__).parent.parent)
if root_path not in sys.path:
    sys.path.append(root_path)

from webjob.modules.logging import BaseLogger


@pytest.fixture
def mock_logger():
    """Create a mock logger."""
    return Mock(spec=BaseLogger)
