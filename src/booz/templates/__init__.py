"""
booz.templates - Project Template Trees
=======================================

This package holds the template trees rendered by ``booz.renderer``.

Layout
------
    frontend/
        react/      Vite + React + TypeScript
        vue/        Vite + Vue + TypeScript
        nextjs/     Next.js (app router)
    backend/
        hono/       Hono on Node
        node-ts/    Express + TypeScript

Each ``<kind>/<stack>`` directory is rendered as a whole into the project
directory (or into ``client/`` / ``server/`` for fullstack projects).

Template Naming Convention
--------------------------
- Files ending in ``.j2`` are rendered; the output name drops ``.j2``
- Every other file is copied byte-for-byte, so framework syntax such as
  Vue's ``{{ }}`` interpolation is safe in plain files

Template Context
----------------
    name : str
        The project name as entered by the user.
"""
