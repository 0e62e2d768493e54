"""API server entrypoint."""
from __future__ import annotations

import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from ormimport.adapters.input.api.fastapi_adapter import FastAPIAdapter
from ormimport.adapters.presentation.json_presenter import JsonPresenter
from ormimport.common.config import get_settings
from ormimport.common.container import create_import_service
from ormimport.common.logging import setup_logging


def get_app():
  setup_logging(get_settings().log_level)
  import_service = create_import_service()
  adapter = FastAPIAdapter(import_service, JsonPresenter())
  return adapter.app


def main() -> None:
  uvicorn.run(get_app(), host='0.0.0.0', port=8000)


if __name__ == '__main__':
  main()
