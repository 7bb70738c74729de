import os
import sys

sys.path.insert(0, os.path.abspath("../../src"))

project = "Presetreq"
author = "Presetreq contributors"
import presetreq

release = presetreq.__version__

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "myst_parser",
]

templates_path = ["_templates"]
exclude_patterns = []

myst_heading_anchors = 3
myst_enable_extensions = ["colon_fence"]

autodoc_member_order = "bysource"

autodoc_default_options = {
    "imported-members": False,
    "show-inheritance": True,
}

html_theme = "furo"
html_title = "Presetreq"
