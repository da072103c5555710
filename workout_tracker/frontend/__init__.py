"""
Frontend module for the workout tracker
=====================================

Dash-based web front end: map, new-workout form, workout list and alerts.

Components:
- components/: Map view, form state, list view and alerts
- layouts/: Page layout
- utils/: Formatting of captions and list entries
- presenter: Draws a workout as a marker plus a list entry

Usage:
    from workout_tracker.app import create_app

    app = create_app()
    app.run(debug=True)
"""

from .main_dashboard import WorkoutDashboard
from .presenter import WorkoutPresenter

__all__ = ['WorkoutDashboard', 'WorkoutPresenter']
