#!/usr/bin/env python3
"""
Application Deployment Menu
Interactive front end that dispatches to the bundle and archive deployers.
"""

import sys

from .config import ConfigError, load_settings, BUNDLE, ARCHIVE
from .deployment.archive import deploy_archive
from .deployment.bundle import deploy_bundle
from .deployment.utils import log_info, log_error, print_banner
from .executors import get_tools, missing_commands

DEPLOYERS = {
    BUNDLE: deploy_bundle,
    ARCHIVE: deploy_archive,
}


def show_menu(settings):
    print()
    print_banner("APPLICATION DEPLOYMENT MENU")
    print("Which application do you want to deploy?")
    for number, target in enumerate(settings.targets, start=1):
        print(f"  {number}. {target.name}")
    print(f"  {len(settings.targets) + 1}. Exit")
    print("-" * 41)


def parse_choice(raw, option_count):
    """Menu number in 1..option_count, or None for anything else."""
    raw = (raw or '').strip()
    if not raw.isdecimal():
        return None
    choice = int(raw)
    if 1 <= choice <= option_count:
        return choice
    return None


def press_enter_to_continue(prompt):
    try:
        prompt("Press [Enter] to return to the menu...")
    except EOFError:
        pass


def run_menu(settings, tools, prompt=input):
    """
    Loop until the operator picks Exit (or input ends).

    Deployment failures are reported by the deployers and never end the loop.

    Returns:
        Process exit status
    """
    exit_choice = len(settings.targets) + 1

    while True:
        show_menu(settings)
        try:
            raw = prompt(f"Enter your choice [1-{exit_choice}]: ")
        except EOFError:
            print()
            log_info("Input closed. Exiting.")
            return 0
        print()

        choice = parse_choice(raw, exit_choice)
        if choice is None:
            log_error(f"Invalid choice. Please select an option from 1 to {exit_choice}.")
        elif choice == exit_choice:
            log_info("Exiting. Goodbye!")
            return 0
        else:
            target = settings.targets[choice - 1]
            DEPLOYERS[target.mode](target, settings, tools, prompt)

        press_enter_to_continue(prompt)


def main():
    """Main entry point - load settings, check tools, run the menu."""
    try:
        settings = load_settings()
    except ConfigError as e:
        log_error("Invalid deployment configuration:")
        for error in e.errors:
            print(f"  - {error}")
        sys.exit(1)

    missing = missing_commands(settings)
    for cmd in missing:
        log_error(f"Required command '{cmd}' is not installed. Please install it and try again.")
    if missing:
        sys.exit(1)

    try:
        status = run_menu(settings, get_tools(settings))
    except KeyboardInterrupt:
        print()
        log_info("Interrupted. Goodbye!")
        status = 130
    sys.exit(status)


if __name__ == '__main__':
    main()
