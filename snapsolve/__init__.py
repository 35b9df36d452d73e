"""SnapSolve.

Backend for a camera math solver and photo-to-PDF tool.

High-level architecture
-----------------------

- **Solving**: a captured photo is cropped to the on-screen capture rectangle,
  checked for math content and solved by a remote vision model. The answer is
  split into Markdown, inline LaTeX and block LaTeX segments for rendering.
- **Search**: text queries are answered by the same proxy as Markdown with a
  source link and kept in a de-duplicated history.
- **Projects**: ordered photo collections with per-photo edit/revert, exported
  as a 1, 2 or 4 photos-per-page PDF.

Core subpackages
----------------

- ``snapsolve.clients``: async HTTP clients for the vision and search proxy.
- ``snapsolve.billing``: free credits, subscription plans, pricing and
  entitlements.
- ``snapsolve.core.database``: SQLModel entities and async repositories.
- ``snapsolve.server``: the FastAPI application.

Free users get a small number of solves; a credit is consumed only after a
successful answer. Premium users solve without limit.
"""
