"""
Test Suite for the Route Scanner
================================

Test Structure:
    - test_javascript_extractor.py: Pattern matchers
    - test_composer.py: Route composition and endpoint inventory
    - test_parameters.py: Path/body/query parameter aggregation
    - test_collector.py: Source file selection
    - test_orchestrator.py: End-to-end scans, error isolation
    - test_report.py: Report files
    - test_config.py: Configuration and secret detection
    - test_cli.py: Command line entry point
"""
