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

"""
Total Variation denoising with Basis Pursuit DeQuantization (BPDQ).

The following objective function is minimized :
    Lambda * ||x - d||_2^2 + TV(x)
where TV is the isotropic Total Variation computed along some dimensions only.
This can be used, for example, to denoise each frame of a 3D+t dataset
with a 3D TV (dimensions_processed = [True, True, True, False]).

The solver is a projected gradient on the dual problem :
    min_{|u_i| <= gamma}  1/2 ||d - div(u)||_2^2,   gamma = 1/(2 Lambda)
and the solution is x = d - div(u).
The dual variable is stored normalized (u = gamma * w, |w_i| <= 1), so that the
projection is always onto the unit ball.

More information on the algorithm : http://wiki.epfl.ch/bpdq
"""

import logging
import numpy as np
from math import isinf, isnan
from tvbpdq.operators.image import axes_list, dimensions_mask, gradient, div, magnitude_threshold, tv_norm, norm2sq, _float_dtype
from tvbpdq.errors import ConfigurationError, ExtentMismatchError

logger = logging.getLogger(__name__)


def _check_lambda(Lambda):
    try:
        Lambda = float(Lambda)
    except (TypeError, ValueError):
        raise ConfigurationError("Lambda must be a real number (got %s)" % repr(Lambda))
    if isnan(Lambda) or isinf(Lambda) or Lambda <= 0:
        raise ConfigurationError("Lambda must be positive and finite (got %s)" % repr(Lambda))
    return Lambda


def _check_n_it(n_it):
    if isinstance(n_it, (bool, np.bool_)) or not isinstance(n_it, (int, np.integer)):
        raise ConfigurationError("the number of iterations must be an integer (got %s)" % repr(n_it))
    if n_it < 0:
        raise ConfigurationError("the number of iterations must be non-negative (got %d)" % n_it)
    return int(n_it)


def bpdq_constants(Lambda, n_dims):
    '''
    Step size "beta" and dual ball radius "gamma" of BPDQ.

    The squared norm of the gradient along n_dims dimensions is L <= 4*n_dims.
    The projected gradient converges for beta < 2/L ; a margin of 0.9 is taken,
    so that beta*L <= 1.8.

    Parameters
    -----------
    Lambda : float
        weight of the fidelity term (the higher Lambda, the less smoothing)
    n_dims : int
        number of processed dimensions
    '''
    Lambda = _check_lambda(Lambda)
    if n_dims < 1:
        raise ConfigurationError("at least one dimension must be processed (got %d)" % n_dims)
    beta = 0.9 / (2. * n_dims)
    gamma = 1. / (2. * Lambda)
    return beta, gamma


def tv_denoising_bpdq(img, Lambda, n_it=100, dimensions_processed=None, return_all=False):
    '''
    Total Variation denoising with Basis Pursuit DeQuantization.
    The following objective function is minimized : Lambda*||x - img||_2^2 + TV(x)

    Parameters
    -----------
    img : numpy.ndarray
        N-dimensional noisy image. It is not modified.
    Lambda : float
        weight of the fidelity term (the higher Lambda, the less smoothing)
    n_it : int
        number of iterations. With n_it = 0, a copy of the image is returned.
    dimensions_processed : None, sequence of bool or sequence of int
        dimensions along which the TV is computed (default: all). See operators.image.dimensions_mask()
    return_all: bool
        if True, an array containing the values of the objective function will be returned
    '''
    Lambda = _check_lambda(Lambda)
    n_it = _check_n_it(n_it)
    img = np.asarray(img)
    mask = dimensions_mask(img.shape, dimensions_processed)
    beta, gamma = bpdq_constants(Lambda, sum(mask))
    data = img.astype(_float_dtype(img.dtype))

    logger.info("BPDQ: Lambda = %e, %d iterations, dimensions processed: %s (beta = %e, gamma = %e)", Lambda, n_it, str(mask), beta, gamma)
    if return_all: en = np.zeros(n_it)
    if n_it == 0:
        if return_all: return en, data
        else: return data

    w = gradient(0*data, mask)
    for k in range(0, n_it):
        x = data - div(gamma*w, mask)
        g = gradient(beta*x, mask)
        w = magnitude_threshold(w - g/gamma)
        # Calculate norms
        if return_all:
            x = data - div(gamma*w, mask)
            fidelity = norm2sq(x - data)
            tv = tv_norm(x, mask)
            energy = Lambda*fidelity + tv
            en[k] = energy
            if (k%10 == 0):
                logger.debug("[%d] : energy %e \t fidelity %e \t TV %e", k, energy, fidelity, tv)
        elif (k%10 == 0): logger.debug("Iteration %d", k)

    x = data - div(gamma*w, mask)
    if x.shape != data.shape:
        raise ExtentMismatchError("BPDQ: result has shape %s instead of %s" % (str(x.shape), str(data.shape)))
    if return_all: return en, x
    else: return x



class TotalVariationDenoisingBPDQ:
    '''
    Total Variation denoising along the specified dimensions, with BPDQ.
    See tv_denoising_bpdq().

    Lambda, n_it and dimensions_processed are validated when set.
    beta and gamma are derived from them and cannot be set.

    Example
    --------
    >>> tvd = TotalVariationDenoisingBPDQ(0.1, n_it=50, dimensions_processed=[True, True, False])
    >>> res = tvd.denoise(volume)
    '''

    def __init__(self, Lambda, n_it=100, dimensions_processed=None):
        self.Lambda = Lambda
        self.n_it = n_it
        self.dimensions_processed = dimensions_processed


    @property
    def Lambda(self):
        return self._Lambda

    @Lambda.setter
    def Lambda(self, value):
        self._Lambda = _check_lambda(value)


    @property
    def n_it(self):
        return self._n_it

    @n_it.setter
    def n_it(self, value):
        self._n_it = _check_n_it(value)


    @property
    def dimensions_processed(self):
        return self._dimensions_processed

    @dimensions_processed.setter
    def dimensions_processed(self, value):
        if value is None:
            self._dimensions_processed = None
            self._n_dims = None
            return
        value = tuple(axes_list(value))
        if all(isinstance(x, (bool, np.bool_)) for x in value):
            value = tuple(bool(x) for x in value)
            n_dims = sum(value)
        else:
            try:
                value = tuple(int(x) for x in value)
            except (TypeError, ValueError):
                raise ConfigurationError("dimensions_processed entries must be all booleans or all axes (got %s)" % str(value))
            if min(value) < 0:
                # negative axes may alias positive ones, the count needs the image rank
                n_dims = None
            else:
                n_dims = len(set(value))
        if n_dims == 0 or len(value) == 0:
            raise ConfigurationError("at least one dimension must be processed (got %s)" % str(value))
        self._dimensions_processed = value
        self._n_dims = n_dims


    @property
    def beta(self):
        '''
        Dual step size. None if the number of processed dimensions is not known yet :
        dimensions_processed = None means all the dimensions of the image to denoise,
        and negative axes are only resolved against the image rank.
        '''
        if self._n_dims is None: return None
        return bpdq_constants(self.Lambda, self._n_dims)[0]

    @property
    def gamma(self):
        '''
        Radius of the dual ball, in image units
        '''
        return 1. / (2. * self.Lambda)


    def denoise(self, img, return_all=False):
        return tv_denoising_bpdq(img, self.Lambda, n_it=self.n_it, dimensions_processed=self.dimensions_processed, return_all=return_all)

    __call__ = denoise
