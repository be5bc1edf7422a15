# cc/__init__.py
"""
Project package for the fieldplan Django site: settings, root URLConf,
WSGI entry point, request middleware and logging filters.
"""
