# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0


class LineParametersError(Exception):
    """Base class for exceptions in the line parameters engine."""
    pass


class ConfigurationError(LineParametersError):
    """Exception raised when the formulations or the reduction plan are not consistent with the system."""
    def __init__(self, message="Invalid line parameters configuration"):
        self.message = message
        super().__init__(self.message)


class EhemLayerIndexError(ConfigurationError):
    """Exception raised when the equivalent homogeneous earth model points to a layer that does not exist."""
    def __init__(self, layer, n_layers, message="Invalid EHEM layer index"):
        self.layer = layer
        self.n_layers = n_layers
        super().__init__(f"{message}: got {layer}, the earth layers go from 2 to {n_layers} (or -1 for the last one)")


class LayerMismatchError(ConfigurationError):
    """Exception raised when a conductor is not in the layer the earth formulation was configured for."""
    def __init__(self, which, got, expected):
        self.which = which
        self.got = got
        self.expected = expected
        super().__init__(f"conductor {which} is in layer {got} but formulation expects layer {expected}")


class InterfaceConductorError(ConfigurationError):
    """Exception raised when a conductor lies exactly on the air / earth interface."""
    def __init__(self, which, message="Conductor at the air/earth interface (h=0) is invalid"):
        self.which = which
        super().__init__(f"{message}: conductor {which}")


class KronReductionError(ConfigurationError):
    """Exception raised when the Kron reduction would eliminate every conductor."""
    def __init__(self, n, message="Every phase is grounded, nothing is left after the Kron reduction"):
        self.n = n
        super().__init__(f"{message} ({n} phases)")


class BundleError(ConfigurationError):
    """Exception raised for malformed bundle merging inputs."""
    def __init__(self, message="Invalid bundle definition"):
        super().__init__(message)


class InputValidationError(LineParametersError):
    """Exception raised when a geometric or material input is outside its physical domain."""
    def __init__(self, field, value, message="Invalid input"):
        self.field = field
        self.value = value
        self.message = f"{message}: {field}={value}"
        super().__init__(self.message)


class ShapeMismatchError(LineParametersError):
    """Exception raised when impedance and admittance arrays do not describe the same system."""
    def __init__(self, z_shape, y_shape, n_freq, message="Z and Y must be n x n x n_frequencies"):
        self.z_shape = z_shape
        self.y_shape = y_shape
        self.n_freq = n_freq
        self.message = f"{message}: found Z{z_shape}, Y{y_shape} and {n_freq} frequencies"
        super().__init__(self.message)
