"""Shared fixtures: a small Express code base on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

APP_JS = """const express = require('express');
const app = express();
// Mount the API router
app.use('/api', router);
app.get('/health', (req, res) => res.send('ok'));
const port = process.env.PORT || 3000;
"""

USERS_JS = """/* User routes */
router.get('/users/:id', (req, res) => {
  const token = req.headers['authorization'];
  const { fields, expand = false } = req.query;
  res.json({ id: req.params.id });
});
router.post('/users', (req, res) => {
  const name = req.body.name;
  const email = req.body['email'];
  if (process.env.DEBUG) console.log(process.env.PORT);
});
"""

USERS_TEST_JS = """router.delete('/only-in-tests', handler);
"""


@pytest.fixture
def express_app(tmp_path: Path) -> Path:
    """
    Layout:
        backend/app.js
        backend/routes/users.js
        backend/routes/users.test.js
        backend/node_modules/lib/index.js
        backend/README.md
    """
    root = tmp_path / "backend"
    (root / "routes").mkdir(parents=True)
    (root / "node_modules" / "lib").mkdir(parents=True)

    (root / "app.js").write_text(APP_JS, encoding="utf-8")
    (root / "routes" / "users.js").write_text(USERS_JS, encoding="utf-8")
    (root / "routes" / "users.test.js").write_text(USERS_TEST_JS, encoding="utf-8")
    (root / "node_modules" / "lib" / "index.js").write_text("app.get('/vendored', h);\n", encoding="utf-8")
    (root / "README.md").write_text("app.get('/docs-only', h)\n", encoding="utf-8")
    return root
