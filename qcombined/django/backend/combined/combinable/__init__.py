# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2018-2025 Stellan Östlund and Hampus Linander

from . import pmatch
from . import varnumeric
from . import gapselect
from . import oumultiresponse
