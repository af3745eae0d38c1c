def test_imports():
    # Ensure the package is importable for basic sanity
    import treasury_yield_lab

    assert treasury_yield_lab.YieldAnalytics.rolling_apr([], 1.0) == 0
