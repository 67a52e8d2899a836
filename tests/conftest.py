import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import oob_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from oob_toolkit.core.utils.serialization import parse_table_definition  # noqa: E402
from oob_toolkit.engine.dice import ForcedRolls, RandomDraw  # noqa: E402
from oob_toolkit.engine.registry import ProcessorRegistry  # noqa: E402


# Common test fixtures
@pytest.fixture(scope="session")
def registry():
    """Registry over the packaged table data (shared, read-only)."""
    return ProcessorRegistry()


@pytest.fixture
def forced_draw():
    """Factory for a traced RandomDraw replaying the given rolls."""
    def _make(*rolls: int) -> RandomDraw:
        return RandomDraw(ForcedRolls(rolls), trace=True)
    return _make


@pytest.fixture
def make_definition():
    """Factory parsing an in-memory table JSON object into a TableDefinition."""
    def _make(raw: dict, table_id: str = "T", faction: str = "NATO", module: str = "test"):
        return parse_table_definition(table_id, raw, module=module, faction=faction)
    return _make


@pytest.fixture
def table_file():
    """Minimal valid table file with one nation-then-aircraft table."""
    return {
        "schema_version": 1,
        "module": "test",
        "faction": "NATO",
        "tables": {
            "T": {
                "name": "Test CAP",
                "taskings": [
                    {
                        "tasking": "CAP",
                        "flightSize": 2,
                        "flightCount": 1,
                        "source": {
                            "nations": {
                                "1-6": {"name": "US", "aircraft": {"1-10": "F-15C"}},
                                "7-10": {"name": "UK", "aircraft": {"1-10": "Tornado F3"}},
                            }
                        },
                    }
                ],
            }
        },
    }
