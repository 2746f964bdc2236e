"""Pure calculation services: ratios, airline unit economics, analysis, comparison."""
