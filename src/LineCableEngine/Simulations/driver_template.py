# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

import time
from typing import Callable, Union

from LineCableEngine.basic_structures import Logger


class DriverTemplate:
    """
    Base driver template
    """
    name = 'Template'

    def __init__(self,
                 progress_func: Union[Callable[[float], None], None] = None,
                 text_func: Union[Callable[[str], None], None] = None):
        """
        Constructor
        :param progress_func: function receiving the progress in % (optional)
        :param text_func: function receiving the progress messages (optional)
        """
        self.progress_func = progress_func

        self.text_func = text_func

        self.results = None

        self.elapsed = 0

        self.logger = Logger()

        self.__cancel__ = False

        self.__start = time.time()

    def tic(self, skip_logger=False):
        """
        Register start of time
        """
        self.__start = time.time()

        if not skip_logger:
            self.logger.add_info(msg="Elapsed total (s)",
                                 device="Started")

    def toc(self, skip_logger=False):
        """
        Register end of time
        :param skip_logger: skip logging this?
        """
        self.elapsed = time.time() - self.__start

        if not skip_logger:
            self.logger.add_info(msg="Elapsed total (s)",
                                 device="Ended",
                                 value=self.elapsed)

    def run(self):
        """

        """
        pass

    def report_progress(self, val: float):
        """
        Report progress
        :param val: float value
        """
        if self.progress_func is not None:
            self.progress_func(val)

    def report_progress2(self, current: int, total: int):
        """
        Report progress
        :param current: current value (zero based)
        :param total: total value
        """
        val = ((current + 1) / total) * 100
        self.report_progress(val)

    def report_text(self, val: str):
        """
        Report text
        :param val: text value
        """
        if self.text_func is not None:
            self.text_func(val)

    def cancel(self):
        """
        Cancel the simulation
        """
        self.__cancel__ = True
        self.report_text("Cancelled!")

    def is_cancel(self) -> bool:
        """
        Check if cancel was activated
        :return:
        """
        return self.__cancel__
