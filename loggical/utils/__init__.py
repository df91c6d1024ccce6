"""Utilities shared by formatters and transports"""
