#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright (C) 2016, European Synchrotron Radiation Facility
# Main author: Pierre Paleo <pierre.paleo@esrf.fr>
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of TVBPDQ nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#

import logging
import numpy as np
from math import sqrt
from tvbpdq.operators.image import gradient, div, norm2sq, dot
from tvbpdq.errors import ConfigurationError

logger = logging.getLogger(__name__)


def power_method(K, Kadj, data, n_it=10):
    '''
    Calculates the norm of operator K
    i.e the sqrt of the largest eigenvalue of K^T K
    ||K|| = sqrt(lambda_max(K^T K))

    K : forward operator
    Kadj : backward operator (adjoint of K)
    data : initial data, in the range of K
    n_it : number of iterations (at least 1)
    '''
    if n_it < 1:
        raise ConfigurationError("power_method(): at least one iteration is needed (got %d)" % n_it)
    x = np.copy(Kadj(data)) # Copy in case of Kadj = Id
    s = sqrt(norm2sq(x*1.0))
    if s == 0:
        raise ValueError("power_method(): the initial data is in the kernel of Kadj")
    x /= s
    for k in range(0, n_it):
        x = Kadj(K(x))
        s = sqrt(norm2sq(x*1.0))
        if s == 0:
            raise ValueError("power_method(): Kadj(K(x)) vanished at iteration %d" % k)
        x /= s
    logger.debug("power_method(): ||K|| = %e after %d iterations", sqrt(s), n_it)
    return sqrt(s)


def gradient_norm(shape, dimensions_processed=None, n_it=50):
    '''
    Estimates the norm of gradient() restricted to the processed dimensions,
    for images of a given shape.
    Its square is bounded by 4 times the number of processed dimensions.
    '''
    K = lambda x : gradient(x, dimensions_processed)
    Kadj = lambda y : -div(y, dimensions_processed)
    data = np.random.rand(*([len(shape), ] + list(shape)))
    return power_method(K, Kadj, data, n_it)


def check_adjoint(K, Kadj, K_input_shape, Kadj_input_shape):
    '''
    Checks if the operators K and Kadj are actually adjoint of eachother, i.e if
     < K(x), y > = < x, Kadj(y) >
    Returns the absolute difference of both inner products.
    '''

    x = np.random.rand(*K_input_shape)
    y = np.random.rand(*Kadj_input_shape)
    err = abs(dot(K(x), y) - dot(x, Kadj(y)))
    return err
