##############################################################################
# Copyright (c) TableRecord Project developers. See top-level LICENSE file
# for dates and other details. No copyright assignment is required to
# contribute to TableRecord.
##############################################################################

"""
The `cli` package contains the argument parser and the commands of the
`tablerecord` command-line tool.
"""
