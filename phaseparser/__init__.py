"""
Encounter phase segmentation for the Loothing Guild Tracking System

Derives boss phase intervals from combat log phase boundary events so that
performance metrics can be scoped to a single phase of an encounter.
"""

__version__ = "0.1.0"
__author__ = "Loothing Parser Team"
