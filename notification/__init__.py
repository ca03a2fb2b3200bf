"""Alarm fire-event worker"""
