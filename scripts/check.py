#!/usr/bin/env python3
"""
Скрипт полной проверки проекта smart-http-client.

Шаги:
- Форматирование (black)
- Линтинг (ruff)
- Проверка типов (mypy), пропускается с --fast
- Тесты (pytest)

Usage:
    python scripts/check.py
    python scripts/check.py --fast
    python scripts/check.py --fix
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Tuple

ROOT_DIR = Path(__file__).parent.parent
SRC_DIR = ROOT_DIR / "src" / "smart_http"
TESTS_DIR = ROOT_DIR / "tests"

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BLUE = '\033[94m'
BOLD = '\033[1m'
END = '\033[0m'


def run_step(command: List[str], description: str) -> bool:
    """Запустить команду шага и напечатать результат."""
    print(f"\n{BOLD}{BLUE}▶ {description}{END}")

    try:
        result = subprocess.run(command, capture_output=True, text=True, errors='ignore')
    except FileNotFoundError:
        print(f"{YELLOW}⚠ Command not found: {command[0]} - SKIPPED{END}")
        return True

    if result.returncode == 0:
        print(f"{GREEN}✓ {description} - OK{END}")
        return True

    print(f"{RED}✗ {description} - FAILED{END}")
    print((result.stdout + result.stderr)[-2000:])
    return False


def build_steps(args: argparse.Namespace) -> List[Tuple[str, List[str], str]]:
    paths = [str(SRC_DIR), str(TESTS_DIR)]
    steps = []

    if args.fix:
        steps.append(("Black", ["black", *paths], "Форматирование кода (black)"))
        steps.append(("Ruff", ["ruff", "check", "--fix", *paths], "Линтинг с исправлениями (ruff)"))
    else:
        steps.append(("Black", ["black", "--check", *paths], "Проверка форматирования (black)"))
        steps.append(("Ruff", ["ruff", "check", *paths], "Линтинг кода (ruff)"))

    if not args.fast:
        steps.append(("Mypy", ["mypy", str(SRC_DIR)], "Проверка типов (mypy)"))

    if not args.skip_tests:
        steps.append(("Pytest", ["pytest", "-q"], "Тесты (pytest)"))

    return steps


def main() -> int:
    parser = argparse.ArgumentParser(description="Проверка качества кода smart-http-client")
    parser.add_argument("--fast", action="store_true", help="Без mypy")
    parser.add_argument("--fix", action="store_true", help="Автоматические исправления")
    parser.add_argument("--skip-tests", action="store_true", help="Только линтеры")
    args = parser.parse_args()

    print(f"\n{BOLD}{'=' * 60}\n  Smart HTTP Client - Проверка качества\n{'=' * 60}{END}")

    results = [(name, run_step(command, description)) for name, command, description in build_steps(args)]

    print(f"\n{BOLD}{'=' * 60}\n  ИТОГОВЫЙ ОТЧЁТ\n{'=' * 60}{END}\n")
    for name, success in results:
        color, status = (GREEN, "✓ PASSED") if success else (RED, "✗ FAILED")
        print(f"{color}{status:12}{END} {name}")

    if all(success for _, success in results):
        print(f"\n{GREEN}{BOLD}✓ ВСЕ ПРОВЕРКИ ПРОШЛИ УСПЕШНО!{END}\n")
        return 0

    print(f"\n{RED}{BOLD}✗ ЕСТЬ ОШИБКИ!{END}\n")
    return 1


if __name__ == "__main__":
    sys.exit(main())
