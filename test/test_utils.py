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
import unittest
from tvbpdq.utils import estimate_noise_std, step_image
from tvbpdq.errors import ConfigurationError, ExtentMismatchError


class TestUtils(unittest.TestCase):

    def setUp(self):
        # Reproducible results
        np.random.seed(0)


    def test_noise_std_2d(self):
        sigma = 2.
        img = step_image((128, 128), 10., 50.) + np.random.randn(128, 128) * sigma
        s = estimate_noise_std(img)
        self.assertTrue(abs(s - sigma) < 0.1 * sigma, msg="noise estimation 2D failed (%e vs %e)" % (s, sigma))


    def test_noise_std_masked(self):
        sigma = 0.5
        img = np.random.randn(40, 41, 6) * sigma
        s = estimate_noise_std(img, [True, True, False])
        self.assertTrue(abs(s - sigma) < 0.1 * sigma, msg="noise estimation 2D+t failed (%e vs %e)" % (s, sigma))
        s = estimate_noise_std(np.random.randn(2000) * sigma, [True])
        self.assertTrue(abs(s - sigma) < 0.1 * sigma, msg="noise estimation 1D failed (%e vs %e)" % (s, sigma))


    def test_noise_std_small(self):
        self.assertRaises(ExtentMismatchError, estimate_noise_std, np.random.rand(2, 10))


    def test_step_image(self):
        img = step_image((4, 6), 1., 3., axis=1)
        self.assertTrue(np.all(img[:, :3] == 1.) and np.all(img[:, 3:] == 3.))
        img = step_image((5, ), 0., 1.)
        self.assertTrue(np.array_equal(img, [0., 0., 1., 1., 1.]))
        self.assertRaises(ConfigurationError, step_image, (4, 6), 0., 1., 2)
        self.assertRaises(ConfigurationError, step_image, (4, 6), 0., 1., -3)
        img = step_image((4, 6), 0., 1., -2)
        self.assertTrue(np.all(img[:2] == 0.) and np.all(img[2:] == 1.))


    def tearDown(self):
        pass



def suite_all_utils():
    testSuite = unittest.TestSuite()
    testSuite.addTest(TestUtils("test_noise_std_2d"))
    testSuite.addTest(TestUtils("test_noise_std_masked"))
    testSuite.addTest(TestUtils("test_noise_std_small"))
    testSuite.addTest(TestUtils("test_step_image"))
    return testSuite

if __name__ == '__main__':
    mysuite = suite_all_utils()
    runner = unittest.TextTestRunner()
    runner.run(mysuite)
