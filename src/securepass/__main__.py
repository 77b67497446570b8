# Main Entry Point - Command line driver
#
#   securepass demo                    feature walk-through
#   securepass serve [--with-demo]     run the JSON API
#   securepass analyze <password>      strength breakdown
#   securepass generate [--length N]   strong password
#
# Only marshals calls into the VaultManager facade and prints results.

import argparse
import sys

from . import __version__
from .config import get_settings
from .core import ValidationError, configure_logging
from .vault import CredentialEntry, VaultManager, build_vault_manager

RULE = "━" * 48

DEMO_PASSWORDS = [
    "password123",
    "MyP@ssw0rd",
    "Tr0ub4dor&3",
    "correcthorsebatterystaple",
    "xK9#mP2$vN4@qL7!",
]

# (service, username, secret, category)
SAMPLE_ENTRIES = [
    ("Gmail", "john@gmail.com", "MyStr0ng!Pass", "email"),
    ("Facebook", "john.doe", "F@ceb00k2024", "social"),
    ("Chase Bank", "john.doe", "Ch@se$ecure99", "banking"),
    ("Amazon", "john@email.com", "Amaz0n!Shop", "shopping"),
    ("Google Workspace", "john@company.com", "W0rkG00gle#2024", "work"),
]


def mask_password(password: str) -> str:
    """Show only the first and last two characters."""
    if len(password) <= 4:
        return "****"
    return password[:2] + "*" * (len(password) - 4) + password[-2:]


def _section(title: str) -> None:
    print(RULE)
    print(title)
    print(RULE)


def add_sample_entries(vault: VaultManager) -> None:
    print("Adding sample passwords to vault...")
    for service, username, secret, category in SAMPLE_ENTRIES:
        entry = CredentialEntry.create(service, username, secret, category)
        try:
            vault.add_entry(entry)
            print(f"  ✓ Added: {service}")
        except ValidationError as e:
            print(f"  ✗ Failed to add {service}: {e}")
    print()


def run_demo(vault: VaultManager) -> None:
    """Walk through every facade feature with sample data."""
    print("Running Feature Demonstration...\n")

    _section("1. PASSWORD STRENGTH ANALYSIS")
    for pwd in DEMO_PASSWORDS:
        result = vault.analyze_strength(pwd)
        print(f"Password: {mask_password(pwd)}")
        print(f"  Score: {result.score}/100")
        print(f"  Level: {result.level.value}")
        print(f"  Entropy: {result.entropy:.2f} bits")
        print(f"  Feedback: {result.feedback}")
        print()

    _section("2. STRONG PASSWORD GENERATION")
    for _ in range(3):
        generated = vault.generate_password(16, True)
        result = vault.analyze_strength(generated)
        print(f"Generated: {generated}")
        print(f"  Score: {result.score}/100 | Level: {result.level.value}")
        print()

    _section("3. VAULT OPERATIONS")
    add_sample_entries(vault)

    print("Searching for 'google':")
    for entry in vault.search("google"):
        print(f"  - {entry.service} ({entry.username})")

    print("\nPasswords in 'banking' category:")
    for entry in vault.by_category("banking"):
        print(f"  - {entry.service}")

    print()
    _section("4. SECURITY ANALYSIS")
    print("Weak Passwords:")
    weak = vault.find_weak()
    if not weak:
        print("  ✓ No weak passwords found!")
    for entry in weak:
        print(f"  - {entry.service} (Score: weak)")

    print("\nDuplicate Passwords:")
    duplicates = vault.find_duplicates()
    if not duplicates:
        print("  ✓ No duplicate passwords found!")
    for group in duplicates.values():
        print(f"  Used by {len(group)} services:")
        for entry in group:
            print(f"    - {entry.service}")

    print()
    _section("5. VAULT STATISTICS")
    stats = vault.statistics()
    print(f"Total Passwords: {stats.total_entries}")
    print(f"Total Accesses: {stats.total_accesses}")
    print("\nCategory Breakdown:")
    for category, count in stats.category_breakdown.items():
        print(f"  {category}: {count}")

    print()
    _section("6. SECURITY AUDIT REPORT")
    print(vault.security_report())


def cmd_analyze(vault: VaultManager, password: str) -> None:
    result = vault.analyze_strength(password)
    print(f"Score: {result.score}/100")
    print(f"Level: {result.level.value}")
    print(f"Entropy: {result.entropy:.2f} bits")
    print(f"Feedback: {result.feedback}")
    print(
        f"Upper: {result.has_upper}  Lower: {result.has_lower}  "
        f"Digit: {result.has_digit}  Special: {result.has_special}"
    )
    print(f"Common: {result.is_common_password}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="securepass",
        description="SecurePass - in-memory password vault with strength analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"SecurePass v{__version__}",
    )
    parser.add_argument(
        "--quiet-audit",
        action="store_true",
        help="Do not echo audit events to the console",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("demo", help="Run the feature demonstration")

    serve = sub.add_parser("serve", help="Run the JSON API server")
    serve.add_argument("--host", default=None, help="Bind host (default from settings)")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default from settings)")
    serve.add_argument(
        "--with-demo",
        action="store_true",
        help="Populate the vault with the demo data before serving",
    )

    analyze = sub.add_parser("analyze", help="Analyze a password's strength")
    analyze.add_argument("password")

    generate = sub.add_parser("generate", help="Generate a strong password")
    generate.add_argument("--length", type=int, default=16)
    generate.add_argument("--no-special", action="store_true", help="Letters and digits only")

    return parser


def main(argv=None) -> int:
    """Main entry point for the securepass command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.log_level)
    console = settings.audit_console and not args.quiet_audit

    command = args.command or "demo"
    vault = build_vault_manager(audit_console=console)

    if command == "demo":
        run_demo(vault)
    elif command == "analyze":
        cmd_analyze(vault, args.password)
    elif command == "generate":
        print(vault.generate_password(args.length, not args.no_special))
    elif command == "serve":
        from .api.main import start_api_server

        if args.with_demo:
            run_demo(vault)
        try:
            start_api_server(host=args.host, port=args.port, vault_manager=vault)
        except KeyboardInterrupt:
            print("\n\nShutting down API server...")
    return 0


if __name__ == "__main__":
    sys.exit(main())
