"""Clinic application for the campus clinic backend.

Holds the models, serializers, services, views and route registrations
behind the JSON API used by the public site and the admin back office.
"""
