"""Attendance reporting package.

Organized by feature modules (records, grouping, trends, table, charts,
dashboards) with a thin Flask controller layer on top of pure aggregation
functions. Nothing in here reads session or storage state: ids, tokens and
settings are always passed in explicitly.
"""
