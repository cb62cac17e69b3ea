# Sphinx configuration for the API reference in index.rst

import os
import sys
sys.path.insert(0, os.path.abspath('../src'))

project = 'GitHub Label State'
author = 'GitHub Label State contributors'
release = '0.1.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx_autodoc_typehints',
]

exclude_patterns = ['_build']
html_theme = 'sphinx_rtd_theme'

# index.rst only lists modules; pull in their public API.
autodoc_default_options = {
    'members': True,
    'member-order': 'bysource',
}
