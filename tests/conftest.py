import pytest

MANIFEST_WITH_DUPLICATES = """\
{
  // Asset manifest for the level 1 bundle
  "version": 3,
  "files": [
    {
      "_path": "textures/a.png",
      "size": 10
    },
    // b texture
    {
      "_path": "textures/b.png",
      "size": 20,
      "meta": {
        "mips": 4
      }
    },

    /* duplicate of a,
     * added by the exporter */
    {
      "_path": "textures/a.png",
      "size": 30
    },
    {
      "name": "no path"
    },
    {
      "name": "no path"
    }
  ]
}
"""

MANIFEST_CLEANED = """\
{
  // Asset manifest for the level 1 bundle
  "version": 3,
  "files": [
    {
      "_path": "textures/a.png",
      "size": 10
    },
    // b texture
    {
      "_path": "textures/b.png",
      "size": 20,
      "meta": {
        "mips": 4
      }
    },
    {
      "name": "no path"
    },
    {
      "name": "no path"
    }
  ]
}
"""

MANIFEST_UNIQUE = """\
{
  /* nothing repeated here */
  "files": [
    { "_path": "a.png" },   // first
    { "_path": "b.png" },
    { "_path": "c.png" }
  ]
}
"""


@pytest.fixture
def manifest_with_duplicates():
    return MANIFEST_WITH_DUPLICATES


@pytest.fixture
def manifest_cleaned():
    return MANIFEST_CLEANED


@pytest.fixture
def manifest_unique():
    return MANIFEST_UNIQUE


@pytest.fixture
def write_file(tmp_path):
    """Write text (or bytes) under tmp_path and return the path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8", newline="")
        return path
    return _write
