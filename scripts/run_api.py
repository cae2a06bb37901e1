#!/usr/bin/env python3
"""
FastAPIサーバーを起動するエントリポイント
"""
import sys
from pathlib import Path

# プロジェクトルートをPYTHONPATHに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from infrastructure.config.trace_config import TraceConfigLoader
from infrastructure.logging.log_setup import setup_console_logging

if __name__ == "__main__":
    config = TraceConfigLoader().load()
    setup_console_logging(config.log_level)
    uvicorn.run(
        "api.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True  # 開発時の自動リロード
    )
