# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import datetime
_current_year_ = datetime.datetime.now().year

# do not forget to keep a three-number version!!!
__LineCableEngine_VERSION__ = "0.3.0"

about_msg = "LineCableEngine v" + str(__LineCableEngine_VERSION__) + '\n\n'

about_msg += """
LineCableEngine computes the frequency dependent series impedance and
shunt admittance matrices of underground and overhead cable systems,
carrying the measurement uncertainty of the inputs through every stage.\n"""

about_msg += """
This program is free software; you can redistribute it and/or
modify it subject to the terms of the Mozilla Public License, v. 2.0.
If a copy of the MPL was not distributed with this file,
You can obtain one at https://mozilla.org/MPL/2.0/.\n"""

copyright_msg = 'Copyright (C) 2024-' + str(_current_year_) + ' LineCableEngine developers'
