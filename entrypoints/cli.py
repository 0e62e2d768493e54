"""CLI entrypoint for ormimport."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ormimport.adapters.input.cli.cli_adapter import CLIAdapter
from ormimport.common.config import get_settings
from ormimport.common.container import create_import_service


def main() -> None:
  import_service = create_import_service()
  CLIAdapter(import_service, get_settings()).run()


if __name__ == '__main__':
  main()
