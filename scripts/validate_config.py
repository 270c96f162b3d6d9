#!/usr/bin/env python3
"""Configuration and benchmark source validation script."""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from qlab_app.config.loader import ConfigLoader
from qlab_app.config.validation import ConfigValidator
from qlab_app.data.parsers import load_benchmark
from qlab_app.errors import FatalLoadError


def main():
    """Main validation function."""
    print("🔍 Validating QLab benchmark configuration...")

    loader = ConfigLoader.create()
    merged = loader.merge_config()

    errors = ConfigValidator.validate_config(merged)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    print("✅ Configuration is valid")

    config = loader.load()
    print(f"\n📊 Loading benchmark from {config.benchmark.source_path}...")

    try:
        series = load_benchmark(
            config.benchmark.source_path,
            timestamp_format=config.benchmark.timestamp_format,
            timezone=config.benchmark.timezone,
        )
    except FatalLoadError as e:
        print(f"❌ Benchmark source rejected: {e}")
        sys.exit(1)

    print(f"✅ {len(series)} trading days, {series.first_date} → {series.last_date}")
    print(f"\n🎉 All validation passed!")
    sys.exit(0)


if __name__ == "__main__":
    main()
