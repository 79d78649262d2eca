"""
Common utilities for test vector generation.
Provides shared functions for creating deterministic buffers and
computing expected field values independently of binarykit.
"""
import json
import hashlib
import numpy as np
from pathlib import Path
from typing import Dict, List


def set_deterministic_seed(seed: int):
    """Set seed for reproducible random generation."""
    np.random.seed(seed)


def calculate_md5(data: bytes) -> str:
    """Calculate MD5 hash of data."""
    return hashlib.md5(data).hexdigest()


def random_bytes(length: int) -> bytearray:
    """Create a buffer of random bytes."""
    return bytearray(np.random.randint(0, 256, length, dtype=np.uint8).tobytes())


def random_ascii(length: int) -> bytes:
    """Create printable ASCII text of the given length."""
    return bytes(np.random.randint(0x20, 0x7F, length, dtype=np.uint8).tobytes())


def unpack_bits(data: bytes) -> np.ndarray:
    """Expand bytes to a bit array, MSB-first within each byte."""
    return np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8))


def bits_to_int(bits: np.ndarray) -> int:
    """Interpret a bit array as a big-endian unsigned integer."""
    value = 0
    for bit in bits:
        value = (value << 1) | int(bit)
    return value


def align_up(offset: int) -> int:
    """Round a bit offset up to the next byte boundary."""
    return (offset + 7) // 8 * 8


class FieldLayoutGenerator:
    """Base class for field layout generation."""

    def __init__(self, seed: int = 42):
        self.seed = seed
        set_deterministic_seed(seed)

    def generate_layout(self) -> List[Dict]:
        """Generate a list of {"kind", "width"/"count"} dicts. Override in subclasses."""
        raise NotImplementedError

    def build(self) -> Dict:
        """Lay out fields, fill the buffer and compute expected values."""
        layout = self.generate_layout()

        # Assign offsets; byte-level fields start on a byte boundary
        offset = 0
        placed = []
        for field in layout:
            if field["kind"] in ("byte", "string") and offset % 8 != 0:
                pad = align_up(offset) - offset
                placed.append({"kind": "bits", "width": pad, "offset": offset})
                offset += pad
            placed.append({**field, "offset": offset})
            if field["kind"] == "bits":
                offset += field["width"]
            elif field["kind"] == "bool":
                offset += 1
            elif field["kind"] == "byte":
                offset += 8
            else:
                offset += field["count"] * 8

        data = random_bytes(align_up(offset) // 8)

        # Strings must decode, so overwrite their bytes with ASCII
        for field in placed:
            if field["kind"] == "string":
                start = field["offset"] // 8
                data[start:start + field["count"]] = random_ascii(field["count"])

        bits = unpack_bits(data)
        for field in placed:
            start = field["offset"]
            if field["kind"] == "bits":
                field["value"] = bits_to_int(bits[start:start + field["width"]])
            elif field["kind"] == "bool":
                field["value"] = bool(bits[start])
            elif field["kind"] == "byte":
                field["value"] = int(data[start // 8])
            else:
                raw = data[start // 8:start // 8 + field["count"]]
                field["value"] = bytes(raw).decode("ascii")

        return {"data": bytes(data), "fields": placed, "total_bits": offset}

    def save(self, name: str, description: str, output_dir: Path) -> str:
        """Write input file and metadata JSON. Returns MD5 of the input."""
        vector = self.build()
        data = vector["data"]

        input_dir = output_dir / "input"
        expected_dir = output_dir / "expected-output"
        input_dir.mkdir(parents=True, exist_ok=True)
        expected_dir.mkdir(parents=True, exist_ok=True)

        input_file = f"{name}.bin"
        with open(input_dir / input_file, 'wb') as f:
            f.write(data)

        md5_hash = calculate_md5(data)
        metadata = {
            "name": name,
            "description": description,
            "input": {"file": input_file, "size": len(data), "md5": md5_hash},
            "total_bits": vector["total_bits"],
            "fields": vector["fields"],
        }
        with open(expected_dir / f"{name}-metadata.json", 'w') as f:
            json.dump(metadata, f, indent=2)

        print(f"Generated {len(vector['fields'])} fields ({len(data)} bytes)")
        print(f"MD5: {md5_hash}")
        return md5_hash
