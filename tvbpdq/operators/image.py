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
from tvbpdq.errors import ConfigurationError, ExtentMismatchError


def _float_dtype(dtype):
    '''
    Floating point type used for the results of the operators.
    Float inputs keep their precision, anything else is promoted to float64.
    '''
    if np.issubdtype(dtype, np.floating):
        return dtype
    return np.float64


def axes_list(dimensions_processed):
    '''
    Turn a dimensions_processed argument (sequence of bool, sequence of int, or a single axis)
    into a list. A scalar boolean is rejected, as it does not tell which axis it refers to.
    '''
    if isinstance(dimensions_processed, (bool, np.bool_)):
        raise ConfigurationError("dimensions_processed must be a sequence of booleans or of axes, not a single boolean (got %s)" % repr(dimensions_processed))
    if isinstance(dimensions_processed, (int, np.integer)):
        return [dimensions_processed]
    try:
        return list(dimensions_processed)
    except TypeError:
        raise ConfigurationError("dimensions_processed must be a sequence of booleans or of axes (got %s)" % repr(dimensions_processed))


def dimensions_mask(shape, dimensions_processed=None):
    '''
    Build the (immutable) tuple of booleans telling which axes are processed.

    Parameters
    -----------
    shape : tuple
        shape of the image
    dimensions_processed : None, sequence of bool or sequence of int
        None means all the axes.
        A sequence of booleans must have one entry per axis.
        A sequence of integers is a list of axes (negative values allowed).
    '''
    ndim = len(shape)
    if dimensions_processed is None:
        mask = (True, ) * ndim
    else:
        dp = axes_list(dimensions_processed)
        if all(isinstance(x, (bool, np.bool_)) for x in dp):
            if len(dp) != ndim:
                raise ConfigurationError("dimensions_processed has %d entries, but the image has %d dimensions" % (len(dp), ndim))
            mask = tuple(bool(x) for x in dp)
        else:
            m = [False] * ndim
            for ax in dp:
                try:
                    ax = int(ax)
                except (TypeError, ValueError):
                    raise ConfigurationError("dimensions_processed entries must be all booleans or all axes (got %s)" % repr(ax))
                if ax < -ndim or ax >= ndim:
                    raise ConfigurationError("axis %d is out of range for an image with %d dimensions" % (ax, ndim))
                m[ax] = True
            mask = tuple(m)
    if not any(mask):
        raise ConfigurationError("at least one dimension must be processed (got %s)" % str(mask))
    return mask


def gradient(img, dimensions_processed=None):
    '''
    Compute the gradient of an image as a numpy array, with forward differences.

    The result has shape (img.ndim, ) + img.shape ; component d holds the
    differences along axis d. The difference at the last index of an axis is 0,
    and so are the components of the axes which are not processed.

    Parameters
    -----------
    img : numpy.ndarray
        N-dimensional image
    dimensions_processed : see dimensions_mask()
    '''
    img = np.asarray(img)
    img = img.astype(_float_dtype(img.dtype), copy=False) # no wrap-around of unsigned differences
    mask = dimensions_mask(img.shape, dimensions_processed)
    shape = [img.ndim, ] + list(img.shape)
    res = np.zeros(shape, dtype=img.dtype)
    for d in range(img.ndim):
        if not mask[d]: continue
        slice_all = [slice(None), ] * img.ndim
        slice_all[d] = slice(None, -1)
        res[d][tuple(slice_all)] = np.diff(img, axis=d)
    return res


def div(grad, dimensions_processed=None):
    '''
    Compute the divergence of a gradient, with backward differences.
    This is the opposite of the adjoint of gradient() :
        < gradient(x), y > = < x, -div(y) >

    Parameters
    -----------
    grad : numpy.ndarray
        gradient-like array of shape (N, ) + image_shape, where N = len(image_shape)
    dimensions_processed : see dimensions_mask()
    '''
    grad = np.asarray(grad)
    ndim = grad.ndim - 1
    if ndim < 1 or grad.shape[0] != ndim:
        raise ExtentMismatchError("div(): expected an array of shape (N, ) + image_shape with N = len(image_shape), got %s" % str(grad.shape))
    mask = dimensions_mask(grad.shape[1:], dimensions_processed)
    res = np.zeros(grad.shape[1:], dtype=_float_dtype(grad.dtype))
    for d in range(ndim):
        if not mask[d]: continue
        this_grad = np.rollaxis(grad[d], d)
        this_res = np.rollaxis(res, d)
        this_res[:-1] += this_grad[:-1]
        this_res[1:] -= this_grad[:-1]
    return res


def magnitude_threshold(grad, threshold=1.0):
    '''
    Pointwise projection onto the L2 ball of radius "threshold", i.e
    each vector v = grad[:, i] is replaced by v / max(1, ||v||_2 / threshold).

    This is the proximal operator of the dual of the L2,1 norm (isotropic TV).

    Parameters
    ------------
    grad : gradient-like numpy array, the vectors are along the first axis
    threshold : radius of the ball
    '''
    if not threshold > 0:
        raise ConfigurationError("magnitude_threshold(): threshold must be positive (got %s)" % str(threshold))
    grad = np.asarray(grad)
    n = np.maximum(np.sqrt(np.sum(grad**2, 0))/threshold, 1.0)
    return grad / n


def tv_norm(img, dimensions_processed=None):
    '''
    Isotropic Total Variation of an image, along the processed dimensions only

    .. math::

        TV(x) = \\sum_i \\left\\| (\\nabla x)_i \\right\\|_2
    '''
    g = gradient(img, dimensions_processed)
    return np.sum(np.sqrt(np.sum(g**2, 0)))


# ------------------------------------------------------------------------------
# ------------------------------ Norms -----------------------------------------
# ------------------------------------------------------------------------------


def norm2sq(mat):
    return np.dot(mat.ravel(), mat.ravel())


def dot(mat1, mat2):
    return np.dot(mat1.ravel(), mat2.ravel())
