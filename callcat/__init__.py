"""CallCat Scheduling Service

Timezone-aware scheduling helpers for the CallCat call dashboard.
"""

__version__ = "0.1.0"
