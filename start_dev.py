#!/usr/bin/env python3
"""
Finance Forecasting Engine - Development Server Launcher

Quick start script that:
1. Checks dependencies
2. Sets up the environment
3. Optionally runs the engine over demo data
4. Starts the Flask development server

Usage:
    python start_dev.py              # Start with default settings
    python start_dev.py --demo       # Print a demo forecast first
    python start_dev.py --port 8080  # Use custom port
    python start_dev.py --demo-only  # Run the demo and exit
"""

import os
import sys
import argparse
from pathlib import Path

# Colors for terminal output
class Colors:
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    BOLD = '\033[1m'
    END = '\033[0m'

def print_banner():
    """Print startup banner"""
    print(f"\n{Colors.GREEN}{Colors.BOLD}  Finance Forecasting Engine{Colors.END}")
    print(f"  {Colors.CYAN}Holt-Winters forecasting and spending trends{Colors.END}\n")

def print_step(step_num, message, status="running"):
    """Print step with status"""
    if status == "running":
        icon = f"{Colors.YELLOW}...{Colors.END}"
    elif status == "done":
        icon = f"{Colors.GREEN}ok{Colors.END}"
    elif status == "skip":
        icon = f"{Colors.BLUE}->{Colors.END}"
    else:
        icon = f"{Colors.RED}x{Colors.END}"

    print(f"  {icon} Step {step_num}: {message}")

def check_dependencies():
    """Return the required packages that are not importable"""
    required = ['numpy', 'flask']
    missing = []

    for package in required:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    return missing

def setup_environment():
    """Set up environment variables"""
    os.environ.setdefault('FLASK_APP', 'web.app:app')
    os.environ.setdefault('FLASK_DEBUG', 'True')
    os.environ.setdefault('FORECAST_ENV', 'development')

def run_demo(profile, days, horizon):
    """Run every engine operation over a generated household"""
    sys.path.insert(0, str(Path(__file__).parent))

    from src.demo_data import DemoDataGenerator
    from src.forecasting import BalanceForecaster, SpendingPredictor, TrendAnalyzer

    household = DemoDataGenerator(seed=7).generate_household(profile=profile, days=days)

    balance = BalanceForecaster().forecast_from_balance(household.balance_history, horizon)
    spending = SpendingPredictor().predict(household.transactions, horizon)
    analyzer = TrendAnalyzer()
    trend = analyzer.analyze(household.spend_daily())
    health = analyzer.assess_financial_health(
        household.spend_daily(), household.balance_daily(), household.income_daily()
    )

    print(f"\n    {Colors.BOLD}{household.name}{Colors.END} ({days} days of history)")
    print(f"    Balance in {horizon} days: ${balance.points[-1].value:,.2f}")
    for prediction in sorted(spending.predictions, key=lambda p: -p.amount):
        print(f"    {prediction.category:<14} ${prediction.amount:>10,.2f}")
    print(f"    Spend trend: {trend.components.trend_direction.value}")
    for insight in trend.insights:
        print(f"      - {insight}")
    print(f"    Risk level: {health.risk_level.value} ({health.liquidity_days:.0f} liquidity days)")
    for suggestion in health.suggestions:
        print(f"      - {suggestion}")
    print()

def run_server(port=5101, host='127.0.0.1'):
    """Run the Flask development server"""
    sys.path.insert(0, str(Path(__file__).parent))

    from web.app import create_app

    app = create_app()

    print(f"\n{Colors.GREEN}{'='*60}{Colors.END}")
    print(f"{Colors.BOLD}  Server running at: {Colors.CYAN}http://{host}:{port}{Colors.END}")
    print(f"{Colors.GREEN}{'='*60}{Colors.END}\n")

    app.run(debug=True, port=port, host=host, use_reloader=True)

def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Finance Forecasting Engine Development Server'
    )
    parser.add_argument(
        '--demo',
        action='store_true',
        help='Run the engine over demo data before starting'
    )
    parser.add_argument(
        '--demo-only',
        action='store_true',
        help='Run the demo and exit without starting the server'
    )
    parser.add_argument(
        '--profile',
        default='steady_saver',
        help='Demo household profile (default: steady_saver)'
    )
    parser.add_argument(
        '--days',
        type=int,
        default=90,
        help='Days of demo history (default: 90)'
    )
    parser.add_argument(
        '--horizon',
        type=int,
        default=30,
        help='Demo forecast horizon in days (default: 30)'
    )
    parser.add_argument(
        '--port',
        type=int,
        default=5101,
        help='Port to run server on (default: 5101)'
    )
    parser.add_argument(
        '--host',
        default='127.0.0.1',
        help='Host to bind to (default: 127.0.0.1)'
    )

    args = parser.parse_args()

    print_banner()

    # Step 1: Check dependencies
    print_step(1, "Checking dependencies...", "running")
    missing = check_dependencies()
    if missing:
        print_step(1, f"Missing packages: {', '.join(missing)} (run: pip install -e .)", "error")
        sys.exit(1)
    print_step(1, "All dependencies installed", "done")

    # Step 2: Set up environment
    print_step(2, "Setting up environment...", "running")
    setup_environment()
    print_step(2, "Environment configured", "done")

    # Step 3: Demo run if requested
    if args.demo or args.demo_only:
        print_step(3, f"Forecasting demo household '{args.profile}'...", "running")
        try:
            run_demo(args.profile, args.days, args.horizon)
            print_step(3, "Demo complete", "done")
        except Exception as e:
            print_step(3, f"Demo failed: {e}", "error")
            sys.exit(1)
    else:
        print_step(3, "Demo skipped (use --demo to run)", "skip")

    if args.demo_only:
        return

    # Step 4: Start server
    print_step(4, "Starting development server...", "running")

    try:
        run_server(port=args.port, host=args.host)
    except KeyboardInterrupt:
        print(f"\n{Colors.YELLOW}Server stopped.{Colors.END}")
    except Exception as e:
        print(f"\n{Colors.RED}Server error: {e}{Colors.END}")
        sys.exit(1)

if __name__ == '__main__':
    main()
