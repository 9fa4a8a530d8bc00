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


from setuptools import setup
import os



def get_version():

    with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "tvbpdq", "version.py")) as fid:
        lines = fid.readlines()
    # Get the line containing "version ="
    idx = -1
    for i, l in enumerate(lines):
        if ("version" in l) and ("=" in l): idx = i
    if idx == -1: raise RuntimeError("Unable to get version from tvbpdq/version.py")

    # Extract the version number
    ver = lines[idx].rstrip('\n').split("=")[-1].strip(' ').strip('"')
    return ver



if __name__ == '__main__':

    __version = get_version()

    packages = ['tvbpdq', 'tvbpdq.operators', 'tvbpdq.algorithms']
    package_dir = {"tvbpdq": "tvbpdq",
            'tvbpdq.operators': 'tvbpdq/operators',
            'tvbpdq.algorithms': 'tvbpdq/algorithms'}

    setup(name = "tvbpdq",
        version = __version,
        description = "Total Variation denoising along selected dimensions with Basis Pursuit DeQuantization",
        license="BSD",
        packages=packages,
        package_dir = package_dir,
        install_requires = ["numpy", "scipy"],
        extras_require = {"test": ["pytest"]},

        long_description = """
        This module denoises N-dimensional images by minimizing Lambda*||x - d||_2^2 + TV(x),
        where the Total Variation is computed along a subset of the dimensions only
        (eg. the spatial dimensions of a 3D+t dataset).
        It provides the gradient, divergence and dual projection operators, and the BPDQ solver.
        """
        )
