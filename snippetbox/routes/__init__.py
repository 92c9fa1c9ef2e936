# Routes package init
"""
Snippetbox — Routes Package
=============================

Route Inventory:
    - snippets.py:  GET  /                      (latest snippets)
                    GET  /snippet/view/{id}     (single snippet)
                    GET  /snippet/create        (create form)
                    POST /snippet/create        (submit form)
    - health.py:    GET  /health                (service health check)

Routes stay thin: parse the request, call the store, render or redirect.
"""
