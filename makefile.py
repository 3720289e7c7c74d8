#!/usr/bin/env python3
"""
makefile.py - Task runner for pghexedit.

Usage:
    python makefile.py <target>

Requires: pip install -e ".[dev]"   (colorama, pytest, pytest-cov)
"""

import os
import shutil
import subprocess
import sys
from collections import defaultdict

from colorama import Fore, Style
from colorama import init as _colorama_init

_colorama_init(autoreset=True)


def print_header(title):
    bar = Fore.CYAN + Style.BRIGHT + "=" * 52 + Style.RESET_ALL
    label = Fore.CYAN + Style.BRIGHT + f"  {title}" + Style.RESET_ALL
    print(f"\n{bar}\n{label}\n{bar}")


def print_step(msg):
    print(f"{Fore.YELLOW}-->{Style.RESET_ALL} {msg}")


def print_success(msg):
    print(f"{Fore.GREEN}[OK]{Style.RESET_ALL} {msg}")


def print_warn(msg):
    print(f"{Fore.YELLOW}[WARN]{Style.RESET_ALL} {msg}")


def run_cmd(args, allow_failure=False):
    """
    Run a command as a subprocess, streaming output directly to the terminal.
    Exits with the subprocess exit code on failure unless allow_failure=True.
    """
    try:
        result = subprocess.run(args)
    except FileNotFoundError:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Command not found: '{args[0]}'")
        print(f"        Ensure '{args[0]}' is installed and on your PATH.")
        if not allow_failure:
            sys.exit(127)
        return 127
    if result.returncode != 0 and not allow_failure:
        sys.exit(result.returncode)
    return result.returncode


def target_test():
    print_header("Running All Tests")
    run_cmd([sys.executable, "-m", "pytest", "tests", "-v"])


def target_test_cov():
    print_header("Running Tests with Coverage")
    print_step("Coverage of the pghexedit package")
    run_cmd([sys.executable, "-m", "pytest", "tests",
             "--cov=pghexedit", "--cov-report=term-missing"])


def target_lint():
    print_header("Running Linter")
    print_step("pyflakes over pghexedit, tests and examples")
    run_cmd([sys.executable, "-m", "pyflakes", "pghexedit", "tests", "examples"],
            allow_failure=True)


def target_run():
    print_header("Annotating a Relation File")
    if len(sys.argv) < 3:
        print_warn("Usage: python makefile.py run <relation file> [pg_hexedit options]")
        sys.exit(1)
    print_step(f"Annotating {sys.argv[2]}")
    run_cmd([sys.executable, "-m", "pghexedit"] + sys.argv[3:] + [sys.argv[2]])


def target_example():
    print_header("Running Page Annotation Example")
    run_cmd([sys.executable, os.path.join("examples", "annotate_example.py")])


def target_clean():
    print_header("Cleaning Caches")
    print_step("Removing __pycache__, .pytest_cache and egg-info directories")
    removed = 0
    for root, dirs, _ in os.walk("."):
        for name in list(dirs):
            if name in ("__pycache__", ".pytest_cache") or name.endswith(".egg-info"):
                path = os.path.join(root, name)
                try:
                    shutil.rmtree(path)
                    removed += 1
                except OSError as exc:
                    print_warn(f"Could not remove {path}: {exc}")
                dirs.remove(name)
    if os.path.exists(".coverage"):
        os.remove(".coverage")
    print_success(f"Removed {removed} cache directories")


TARGETS = {
    "test": (target_test, "Run all tests", "Testing"),
    "test-cov": (target_test_cov, "Run tests with coverage", "Testing"),
    "lint": (target_lint, "Run pyflakes over the sources", "Build"),
    "run": (target_run, "Annotate FILE: run <file> [options]", "Run"),
    "example": (target_example, "Run the page annotation example", "Run"),
    "clean": (target_clean, "Remove caches and build metadata", "Tools"),
    "help": (None, "Show this help message", "Meta"),
}


def target_help():
    title = Fore.CYAN + Style.BRIGHT + "pghexedit - Available Commands" + Style.RESET_ALL
    print(f"\n{title}\n")
    groups = defaultdict(list)
    for name, (_, desc, group) in TARGETS.items():
        groups[group].append((name, desc))
    for group in ["Testing", "Build", "Run", "Tools", "Meta"]:
        if group not in groups:
            continue
        print(Fore.YELLOW + Style.BRIGHT + f"{group}:" + Style.RESET_ALL)
        for name, desc in groups[group]:
            print(f"  {Fore.GREEN}{name.ljust(24)}{Style.RESET_ALL}  {desc}")
        print()


TARGETS["help"] = (target_help, "Show this help message", "Meta")


def main():
    if len(sys.argv) < 2:
        target_help()
        sys.exit(0)

    name = sys.argv[1]

    if name not in TARGETS:
        print(f"{Fore.RED}[ERROR]{Style.RESET_ALL} Unknown target: '{name}'")
        print("  Run:  python makefile.py help  to list all available targets.")
        sys.exit(1)

    func, _, _ = TARGETS[name]
    func()


if __name__ == "__main__":
    main()
