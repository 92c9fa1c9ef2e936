"""
Snippetbox — Application Package
==================================

A small server-rendered application for sharing text snippets that expire.

Architecture Note:

    ┌─────────────────────────────────────┐
    │     Routes (HTTP + templates)       │  ← parse input, render or redirect
    ├─────────────────────────────────────┤
    │  Forms & Validator                  │  ← decode body, check field rules
    ├─────────────────────────────────────┤
    │  Services (SnippetStore)            │  ← all SQL, NotFound vs Storage errors
    ├─────────────────────────────────────┤
    │  Models & Schemas (Data)            │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │  Database (Persistence)             │  ← async engine, session per request
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
