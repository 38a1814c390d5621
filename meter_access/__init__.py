"""Authenticated data access and session guard for the fluid meter web application."""
