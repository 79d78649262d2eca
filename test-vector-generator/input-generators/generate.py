#!/usr/bin/env python3
"""
Generate random field layout test vectors for binarykit.

Each vector is a random buffer plus a sequence of fields (bit runs of
random width, booleans, bytes and ASCII strings). Expected values are
computed with numpy.unpackbits, not with the reader under test.

Usage:
    python generate.py <config.yaml>
"""
import sys
import yaml
import numpy as np
from pathlib import Path
from typing import Dict, List
from common import FieldLayoutGenerator

KINDS = ["bits", "bool", "byte", "string"]


class RandomFieldGenerator(FieldLayoutGenerator):
    """Generator for random mixed-width field layouts."""

    def __init__(self, config: dict):
        super().__init__(config['input']['seed'])
        self.num_fields = config['input']['num_fields']
        self.max_width = config['input']['max_width']
        self.max_string = config['input']['max_string']

        weights = config['input']['weights']
        total = sum(weights[kind] for kind in KINDS)
        self.probabilities = [weights[kind] / total for kind in KINDS]

    def generate_layout(self) -> List[Dict]:
        """Pick field kinds and sizes."""
        layout = []
        for _ in range(self.num_fields):
            kind = str(np.random.choice(KINDS, p=self.probabilities))
            if kind == "bits":
                layout.append({"kind": kind, "width": int(np.random.randint(0, self.max_width + 1))})
            elif kind == "string":
                layout.append({"kind": kind, "count": int(np.random.randint(0, self.max_string + 1))})
            else:
                layout.append({"kind": kind})
        return layout


def main():
    if len(sys.argv) != 2:
        print("Usage: generate.py <config.yaml>")
        sys.exit(1)

    config_file = sys.argv[1]

    # Load configuration
    with open(config_file, 'r') as f:
        config = yaml.safe_load(f)

    print(f"Generating field layout test vector: {config['name']}")
    print(f"Description: {config['description'].strip()}")

    # Output dir is relative to the config file
    output_dir = (Path(config_file).parent / config['output']['dir']).resolve()

    generator = RandomFieldGenerator(config)
    print(f"\nGenerating {config['input']['num_fields']} fields...")
    generator.save(config['name'], config['description'].strip(), output_dir)

    print(f"Output: {output_dir}")
    print("\nDone!")

    return 0


if __name__ == '__main__':
    sys.exit(main())
