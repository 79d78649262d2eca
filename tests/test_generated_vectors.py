"""Generated vectors validation.

Builds vectors from the YAML configs in test-vector-generator/configs
with the numpy generator and replays them against BitReader. Expected
values come from numpy.unpackbits, not from the reader.

Skip slow tests (large-scale):
    pytest tests/test_generated_vectors.py --fast
"""

import json
import sys
from pathlib import Path

import pytest

pytest.importorskip("numpy")
yaml = pytest.importorskip("yaml")

from binarykit import BitReader  # noqa: E402

REPO_ROOT = Path(__file__).parent.parent
GENERATOR_DIR = REPO_ROOT / "test-vector-generator"
CONFIG_DIR = GENERATOR_DIR / "configs"

# Add generator scripts to Python path
sys.path.insert(0, str(GENERATOR_DIR / "input-generators"))

from common import unpack_bits  # noqa: E402
from generate import RandomFieldGenerator  # noqa: E402

# Large vectors that take significant time to process
SLOW_VECTORS = {"large-scale"}


def load_config(name: str) -> dict:
    """Load a generator config by name."""
    with open(CONFIG_DIR / f"{name}.yaml") as f:
        return yaml.safe_load(f)


def get_parametrized_configs():
    """Get config names with slow markers applied."""
    params = []
    for config_file in sorted(CONFIG_DIR.glob("*.yaml")):
        name = config_file.stem
        if name in SLOW_VECTORS:
            params.append(pytest.param(name, marks=pytest.mark.slow, id=name))
        else:
            params.append(pytest.param(name, id=name))
    return params


PARAMETRIZED_CONFIGS = get_parametrized_configs()


def read_field(reader: BitReader, field: dict):
    """Read one generated field from the reader."""
    kind = field["kind"]
    if kind == "bits":
        return reader.read_bits(field["width"])
    if kind == "bool":
        return reader.read_bool()
    if kind == "byte":
        return reader.read_byte()
    return reader.read_string(field["count"])


@pytest.fixture
def generated(request):
    """Build a vector in memory from a config."""
    config = load_config(request.param)
    return RandomFieldGenerator(config).build()


class TestGeneratorOracle:
    """Test the numpy helpers against known bit patterns."""

    def test_unpack_bits_msb_first(self) -> None:
        """Test unpackbits expands bytes MSB-first."""
        assert list(unpack_bits(b"\xa5")) == [1, 0, 1, 0, 0, 1, 0, 1]

    def test_configs_present(self) -> None:
        """Test both bundled configs are found."""
        names = {p.id for p in PARAMETRIZED_CONFIGS}
        assert {"random-fields", "large-scale"} <= names

    def test_generation_deterministic(self) -> None:
        """Test the same seed yields the same vector."""
        config = load_config("random-fields")
        first = RandomFieldGenerator(config).build()
        second = RandomFieldGenerator(config).build()
        assert first["data"] == second["data"]
        assert first["fields"] == second["fields"]


class TestGeneratedRead:
    """Test sequential reads match generated values."""

    @pytest.mark.parametrize("generated", PARAMETRIZED_CONFIGS, indirect=True)
    def test_sequential_read(self, generated: dict) -> None:
        """Test every field value and offset."""
        reader = BitReader(generated["data"])

        for i, field in enumerate(generated["fields"]):
            assert reader.position == field["offset"], f"field {i} offset"
            assert read_field(reader, field) == field["value"], (
                f"Field {i} ({field['kind']}) mismatch"
            )

        assert reader.position == generated["total_bits"]

    @pytest.mark.parametrize("generated", PARAMETRIZED_CONFIGS, indirect=True)
    def test_peek_bits_match(self, generated: dict) -> None:
        """Test bit fields can be re-read by absolute offset."""
        reader = BitReader(generated["data"])

        for field in generated["fields"]:
            if field["kind"] == "bits":
                start = field["offset"]
                assert reader.peek_bits(start, start + field["width"]) == field["value"]


class TestGeneratorSave:
    """Test vectors written to disk."""

    def test_save_and_replay(self, tmp_path: Path) -> None:
        """Test saved input and metadata replay through BitReader."""
        config = load_config("random-fields")
        md5_hash = RandomFieldGenerator(config).save("random-fields", "test", tmp_path)

        with open(tmp_path / "expected-output" / "random-fields-metadata.json") as f:
            metadata = json.load(f)
        data = (tmp_path / "input" / metadata["input"]["file"]).read_bytes()

        assert metadata["input"]["md5"] == md5_hash
        assert len(data) == metadata["input"]["size"]

        reader = BitReader(data)
        for field in metadata["fields"]:
            assert read_field(reader, field) == field["value"]
