"""Routing — pattern compiler, ordered route table, and reverse generation.

Routes are registered during setup, each pattern compiled once, and the
table frozen before dispatch begins.
"""
