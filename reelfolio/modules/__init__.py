"""
Reelfolio Modules
=================

Blueprint modules: admin, projects, site, ops.
"""
