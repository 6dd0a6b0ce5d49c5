"""Shape inference and bounds-checked elementwise math for tensor operators.

torch interop lives in opshape.torch_interop and is not imported here.
"""

from opshape import broadcast as broadcast
from opshape import math_util as math_util
from opshape import pool_conv as pool_conv
from opshape import shape_util as shape_util
from opshape.broadcast import calc_shape as calc_shape
from opshape.broadcast import is_valid_broadcast as is_valid_broadcast
from opshape.buffer import HostBuffer as HostBuffer
from opshape.buffer import TensorBuffer as TensorBuffer
from opshape.buffer import as_buffer as as_buffer
from opshape.checks import check_inputs_shape as check_inputs_shape
from opshape.errors import BoundsError as BoundsError
from opshape.errors import InvalidAttributeError as InvalidAttributeError
from opshape.errors import OpShapeError as OpShapeError
from opshape.errors import ShapeError as ShapeError
from opshape.errors import TypeMismatchError as TypeMismatchError
from opshape.errors import UnsupportedError as UnsupportedError
from opshape.gemm import get_shape_of_gemm_result as get_shape_of_gemm_result
from opshape.limits import DEFAULT_LIMITS as DEFAULT_LIMITS
from opshape.limits import ShapeLimits as ShapeLimits
from opshape.pool_conv import AutoPad as AutoPad
from opshape.pool_conv import compute_conv_output_shape as compute_conv_output_shape
from opshape.pool_conv import compute_pool_output_shape as compute_pool_output_shape
from opshape.split import split_shape as split_shape
from opshape.type_util import validate_same_types as validate_same_types
