"""Top-level package for the Finance Tracker.

The primary modules are:

* ``record_client`` – HTTP access to the hosted record service
* ``services`` – one service per record table (accounts, budgets, bills, ...)
* ``aggregation`` – bill status, budget banding and summary rollups
* ``analytics`` / ``visualization`` – pandas trends and Plotly figures

To run the app from the command line you can execute:

```bash
streamlit run finance_tracker/Home.py
```

or use ``run_dashboard.py`` at the repository root.
"""

from . import aggregation  # noqa: F401  # re-exported for convenience
from . import analytics  # noqa: F401  # re-exported for convenience

__all__ = ["aggregation", "analytics"]
