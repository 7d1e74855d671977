# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from typing import List, Any, Dict, Union
import datetime
import numpy as np
import numpy.typing as npt
import pandas as pd
from LineCableEngine.enumerations import LogSeverity

IntList = List[int]
Numeric = Union[int, float, complex, Any]  # Any covers the uncertain scalars
IntVec = npt.NDArray[np.int_]
BoolVec = npt.NDArray[np.bool_]
Vec = npt.NDArray[np.float64]
CxVec = npt.NDArray[np.complex128]
ObjVec = npt.NDArray[np.object_]
Mat = npt.NDArray[np.float64]
CxMat = npt.NDArray[np.complex128]
IntMat = npt.NDArray[np.int_]
ObjMat = npt.NDArray[np.object_]
CxTensor = npt.NDArray[np.complex128]  # n x n x n_frequencies
ObjTensor = npt.NDArray[np.object_]  # n x n x n_frequencies

# arrays whose element type was resolved by the workspace (float / complex or object for uncertain values)
NumVec = Union[Vec, ObjVec]
NumMat = Union[Mat, CxMat, ObjMat]
NumTensor = Union[CxTensor, ObjTensor]


class LogEntry:
    """
    Logger entry
    """

    def __init__(self,
                 time: Union[str, None] = None,
                 msg="",
                 severity: LogSeverity = LogSeverity.Information,
                 device="",
                 value="",
                 expected_value="",
                 frequency=""):
        """

        :param time: time stamp, if None the current time is used
        :param msg: message
        :param severity: LogSeverity
        :param device: element that produced the entry (phase, cable, formulation, transform...)
        :param value: offending value
        :param expected_value: expected value
        :param frequency: frequency of the slice that produced the entry, if any
        """
        if time is None:
            self.time = "{date:%H:%M:%S}".format(date=datetime.datetime.now())
        else:
            self.time = time
        self.msg = str(msg)
        self.severity = severity
        self.device = device
        self.value = value
        self.expected_value = str(expected_value)
        self.frequency = frequency

    def to_list(self) -> List[Any]:
        """
        Get list representation of this entry
        :return:
        """
        return [self.time, self.severity.value, self.msg, self.device,
                self.frequency, self.value, self.expected_value]

    def __str__(self):
        return "{0} {1}: {2} {3} {4} {5}".format(self.time,
                                                 self.severity.value,
                                                 self.msg,
                                                 self.device,
                                                 self.value,
                                                 self.expected_value)


class Logger:
    """
    Logger class
    """

    def __init__(self) -> None:

        self.entries: List[LogEntry] = list()

    def has_logs(self):
        """
        Are there any logs?
        :return: True / False
        """
        return len(self.entries) > 0

    def add_info(self, msg: str, device="", value="", expected_value="", frequency=""):
        """
        Add info entry
        :param msg:
        :param device:
        :param value:
        :param expected_value:
        :param frequency:
        """
        self.add(msg=msg, severity=LogSeverity.Information, device=device, value=value,
                 expected_value=expected_value, frequency=frequency)

    def add_warning(self, msg: str, device="", value="", expected_value="", frequency=""):
        """
        Add warning entry
        :param msg:
        :param device:
        :param value:
        :param expected_value:
        :param frequency:
        """
        self.add(msg=msg, severity=LogSeverity.Warning, device=device, value=value,
                 expected_value=expected_value, frequency=frequency)

    def add_error(self, msg: str, device="", value="", expected_value="", frequency=""):
        """
        Add error entry
        :param msg:
        :param device:
        :param value:
        :param expected_value:
        :param frequency:
        """
        self.add(msg=msg, severity=LogSeverity.Error, device=device, value=value,
                 expected_value=expected_value, frequency=frequency)

    def add(self, msg: str, severity: LogSeverity = LogSeverity.Error, device="", value="", expected_value="",
            frequency=""):
        """
        Add general entry
        :param msg:
        :param severity:
        :param device:
        :param value:
        :param expected_value:
        :param frequency:
        """
        self.entries.append(LogEntry(msg=str(msg),
                                     severity=severity,
                                     device=str(device),
                                     value=str(value),
                                     expected_value=str(expected_value),
                                     frequency=str(frequency)))

    def to_dict(self) -> Dict[str, Dict[str, List[List[Any]]]]:
        """
        Get the logs sorted by severity and message
        :return: Dictionary[Dictionary[List[time, device, frequency, value, expected value]]]
        """
        by_severity = dict()

        for e in self.entries:

            if e.severity.value not in by_severity.keys():
                by_severity[e.severity.value] = dict()

            by_msg = by_severity[e.severity.value]

            row = [e.time, e.device, e.frequency, e.value, e.expected_value]
            if e.msg in by_msg.keys():
                by_msg[e.msg].append(row)
            else:
                by_msg[e.msg] = [row]

        return by_severity

    def to_df(self) -> pd.DataFrame:
        """
        Get DataFrame
        :return: DataFrame
        """
        data = [e.to_list() for e in self.entries]
        df = pd.DataFrame(data=data, columns=['Time', 'Severity', 'Message', 'Device',
                                              'Frequency', 'Value', 'Expected value'])
        df.set_index('Time', inplace=True)
        return df

    def print(self) -> None:
        """
        Print the logs
        """
        print(self.to_df())

    def __str__(self):

        val = ''
        for e in self.entries:
            val += str(e) + '\n'
        return val

    def __getitem__(self, key):
        """
        get [index] implementation
        :param key: integer
        :return: LogEntry
        """
        return self.entries[key]

    def __iadd__(self, other: "Logger"):
        """
        += implementation
        :param other:
        :return:
        """

        if other is not None:
            self.entries += other.entries
        return self

    def __len__(self) -> int:
        return len(self.entries)

    def count_type(self, severity: LogSeverity) -> int:
        """
        Count the number of entries of a certain severity
        :param severity: LogSeverity
        :return: number of occurrences
        """
        c = 0
        for entry in self.entries:
            if entry.severity == severity:
                c += 1

        return c

    def info_count(self) -> int:
        """
        Count the number of information occurrences
        :return:
        """
        return self.count_type(LogSeverity.Information)

    def warning_count(self) -> int:
        """
        Count number of warnings
        :return:
        """
        return self.count_type(LogSeverity.Warning)

    def error_count(self) -> int:
        """
        Count number of errors
        :return:
        """
        return self.count_type(LogSeverity.Error)
