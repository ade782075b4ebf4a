"""
웹 서버 실행 스크립트
백엔드 API 서버를 시작합니다.
"""

import logging
import os

import uvicorn

HOST = os.environ.get("SCHEDSIM_HOST", "0.0.0.0")
PORT = int(os.environ.get("SCHEDSIM_PORT", "8000"))
LOG_LEVEL = os.environ.get("SCHEDSIM_LOG_LEVEL", "INFO").upper()


def main():
    logging.basicConfig(
        level=LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    print("=" * 60)
    print("  CPU 스케줄링 시뮬레이터 - 웹 서버")
    print("=" * 60)
    print()
    print(f"API 문서: http://localhost:{PORT}/docs")
    print("종료하려면 Ctrl+C를 누르세요.")
    print("-" * 60)

    uvicorn.run("web.backend.app:app", host=HOST, port=PORT,
                log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
