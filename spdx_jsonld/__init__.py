# -*- coding: utf-8 -*-
"""
spdx-jsonld

Schema-driven codec between an SPDX 3 object-model store and the canonical
SPDX 3 JSON-LD graph serialization.
"""

import logging


__version__ = "0.1.0"


class NullHandler(logging.Handler):
    """
    Null handler.

    c.f.
    http://docs.python.org/howto/logging.html#library-config
    """

    def emit(self, record):
        """Emit."""
        pass


hndlr = NullHandler()
logging.getLogger("spdx_jsonld").addHandler(hndlr)
