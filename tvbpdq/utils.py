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

import numpy as np
from math import sqrt, pi
from scipy.ndimage import convolve
from tvbpdq.operators.image import dimensions_mask
from tvbpdq.errors import ConfigurationError, ExtentMismatchError


def estimate_noise_std(img, dimensions_processed=None):
    """
    Given a noisy image, estimate the standard deviation of the noise,
    assuming that the noise is additive and Gaussian.
    The original 2D method is extended to N dimensions with the separable
    kernel [1, -2, 1] x ... x [1, -2, 1] along the processed dimensions.
    Dimensions which are not processed are treated as independent samples.

    Reference
    ----------
    Fast Noise Variance Estimation
    COMPUTER VISION AND IMAGE UNDERSTANDING
    Vol. 64, No. 2, September, pp. 300–302, 1996
    ARTICLE NO 0060
    """
    img = np.asarray(img, dtype=np.float64)
    mask = dimensions_mask(img.shape, dimensions_processed)
    kern = np.ones([1, ] * img.ndim)
    for d in range(img.ndim):
        if not mask[d]: continue
        if img.shape[d] < 3:
            raise ExtentMismatchError("estimate_noise_std(): dimension %d has size %d, at least 3 is needed" % (d, img.shape[d]))
        shp = [1, ] * img.ndim
        shp[d] = 3
        kern = kern * np.array([1., -2., 1.]).reshape(shp)
    i2 = np.abs(convolve(img, kern))
    # Discard the borders along the processed dimensions
    slice_all = tuple(slice(1, -1) if mask[d] else slice(None) for d in range(img.ndim))
    i2 = i2[slice_all]
    return sqrt(pi/2) * np.mean(i2) / sqrt(np.sum(kern**2))


def step_image(shape, low=0., high=1., axis=-1):
    """
    Piecewise constant image : "low" on the first half along "axis", "high" on the second half.
    """
    if len(shape) == 0:
        raise ConfigurationError("step_image(): shape must have at least one dimension")
    if axis < -len(shape) or axis >= len(shape):
        raise ConfigurationError("step_image(): axis %d is out of range for a shape with %d dimensions" % (axis, len(shape)))
    res = np.zeros(shape) + low
    slice_all = [slice(None), ] * len(shape)
    slice_all[axis] = slice(shape[axis]//2, None)
    res[tuple(slice_all)] = high
    return res
