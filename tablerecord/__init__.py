##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
TableRecord: active-record persistence for plain Python dataclasses.

This module contains the source code for TableRecord.
"""


__version__ = "0.3.0"
VERSION = __version__
