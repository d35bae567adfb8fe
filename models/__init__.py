#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - Models Package
Enums shared by the tracker view and its console front end

Version: 1.0.0
"""

from .enums import (
    Month,
    ViewShift
)

__all__ = [
    'Month',
    'ViewShift'
]
