#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - Dashboard Dependencies
Providers injected into the API routes
"""

from fastapi import Request

from database.manager import DayStore


def get_day_store(request: Request) -> DayStore:
    """The store the application was created with"""
    return request.app.state.day_store
