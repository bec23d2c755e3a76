#!/usr/bin/env python3
"""
CMAPSS Twin Installation Test and Demo.

This script verifies that the package is properly installed and
walks one engine through every digital twin operation.

Usage:
    python demo.py [--seed 42] [--engine CMAPSS-FD004-002] [--log-dir logs]
"""

import argparse
import sys
from datetime import datetime, timezone
from pathlib import Path


def test_imports():
    """Test that all modules can be imported."""
    print("Testing imports...")

    try:
        from cmapss_twin.utils.config import TwinConfig
        from cmapss_twin.fleet.registry import EngineRegistry
        from cmapss_twin.simulation.sensor_generator import SensorSeriesGenerator
        from cmapss_twin.decision.health import HealthAssessor
        from cmapss_twin.decision.alerts import MaintenanceAlertGenerator
        from cmapss_twin.analytics.performance import PerformanceAnalyzer
        from cmapss_twin.analytics.projections import ProjectionBuilder
        from cmapss_twin.analytics.sensor_status import SensorSnapshot
        from cmapss_twin.twin import DigitalTwin
        print("✅ All imports successful!")
        return True
    except ImportError as e:
        print(f"❌ Import failed: {e}")
        print("\nTry installing the package:")
        print("  pip install -e .")
        return False


def demo_fleet(twin):
    """List the registered fleet."""
    print("\nFleet registry...")

    for record in twin.list_engines():
        print(f"  {record.engine_id}  {record.dataset.value}  "
              f"cycles={record.cycles:<4d} health={record.health_score:5.1f}  "
              f"{record.status.value}")
    print(f"  ✅ {len(twin.list_engines())} engines registered")
    return True


def demo_sensor_series(twin, engine_id):
    """Generate a sensor series and show first and last cycles."""
    print("\nGenerating sensor series...")

    from cmapss_twin.simulation.sensor_generator import readings_to_dataframe

    readings = twin.sensor_series(engine_id, 50)
    frame = readings_to_dataframe(readings)
    columns = ['cycle', 'EGT', 'N1', 'N2', 'fuel_flow', 'vibration', 'T30', 'Nf']
    print(frame[columns].iloc[[0, -1]].to_string(index=False))
    print(f"  ✅ Generated {len(readings)} cycles for {engine_id}")
    return len(readings) == 50


def demo_health(twin, engine_id):
    """Assess engine health."""
    print("\nAssessing health...")

    assessment = twin.assess(engine_id)
    print(f"  RUL: {assessment.remaining_useful_life} cycles")
    print(f"  Degradation rate: {assessment.degradation_rate:.3f} %/100 cycles")
    print(f"  Fault probability: {assessment.fault_probability:.3f}")
    print(f"  Critical components: {', '.join(assessment.critical_components) or 'none'}")
    print(f"  Recommendation: {assessment.maintenance_recommendation}")
    print(f"  ✅ Tier {assessment.maintenance_tier.name}")
    return True


def demo_analytics(twin, engine_id):
    """Derive performance, history, components and sensor status."""
    print("\nDeriving analytics...")

    metrics = twin.performance_metrics(engine_id)
    print(f"  Fuel efficiency: {metrics.fuel_efficiency:.3f}")
    print(f"  Thermal efficiency: {metrics.thermal_efficiency:.3f}")
    print(f"  Thrust: {metrics.thrust_output} lbf")

    history = twin.history(engine_id, 30)
    print(f"  History: {history[0].date} .. {history[-1].date} "
          f"(health {history[0].health_score} -> {history[-1].health_score})")

    for component in twin.component_health(engine_id):
        print(f"  {component.name:<12s} {component.health:3d}  {component.status.value}")

    for reading in twin.sensor_snapshot(engine_id):
        print(f"  {reading.sensor_type:<10s} {reading.value:9.2f} {reading.unit:<6s} "
              f"{reading.status.value}")

    print("  ✅ Analytics derived")
    return True


def demo_alerts(twin):
    """Generate fleet maintenance alerts."""
    print("\nGenerating maintenance alerts...")

    from cmapss_twin.decision.alerts import summarize_alerts

    alerts = twin.maintenance_alerts(datetime.now(timezone.utc))
    summary = summarize_alerts(alerts)
    for level, count in summary['by_level'].items():
        print(f"  {level:<9s} {count}")
    print(f"  Engines requiring action: {', '.join(summary['engines_requiring_action']) or 'none'}")
    print(f"  ✅ {summary['total_alerts']} alerts generated")
    return True


def main():
    """Run all demos."""
    parser = argparse.ArgumentParser(description='CMAPSS Twin demo')
    parser.add_argument('--seed', type=int, default=42, help='Random seed')
    parser.add_argument('--engine', type=str, default='CMAPSS-FD004-002',
                        help='Engine to walk through')
    parser.add_argument('--log-dir', type=Path, default=None,
                        help='Directory for log files')
    args = parser.parse_args()

    print("="*60)
    print("CMAPSS Twin Installation Test")
    print("="*60)

    if not test_imports():
        return 1

    from cmapss_twin.twin import DigitalTwin
    from cmapss_twin.utils.config import TwinConfig
    from cmapss_twin.utils.logging_config import setup_logging

    if args.log_dir is None:
        setup_logging(console=True)
    twin = DigitalTwin(config=TwinConfig(log_dir=args.log_dir), seed=args.seed)

    if twin.lookup(args.engine) is None:
        print(f"❌ Unknown engine: {args.engine}")
        return 1

    demos = [
        ("Fleet", lambda: demo_fleet(twin)),
        ("Sensor Series", lambda: demo_sensor_series(twin, args.engine)),
        ("Health", lambda: demo_health(twin, args.engine)),
        ("Analytics", lambda: demo_analytics(twin, args.engine)),
        ("Alerts", lambda: demo_alerts(twin)),
    ]

    results = []
    for name, demo_func in demos:
        try:
            result = demo_func()
            results.append((name, result))
        except Exception as e:
            print(f"\n❌ {name} demo crashed: {e}")
            results.append((name, False))

    # Summary
    print("\n" + "="*60)
    print("Demo Summary")
    print("="*60)

    passed = sum(1 for _, result in results if result)
    total = len(results)

    for name, result in results:
        status = "✅ PASS" if result else "❌ FAIL"
        print(f"{status}: {name}")

    print(f"\nTotal: {passed}/{total} demos passed")
    return 0 if passed == total else 1


if __name__ == "__main__":
    sys.exit(main())
