"""Tests for Forge dimension arithmetic."""

import unittest

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from forge.utils import (aspect_ratio, edge_crop_box, center_crop_box, square_crop_box, resize_dimensions,
                         scale_dimensions, ratio_dimensions, fill_dimensions)


class TestCropBoxes(unittest.TestCase):
    """Test crop box calculations on (height, width) inputs."""
    
    def test_edge_crop_box(self):
        box = edge_crop_box(300, 400, 10, 20, 30, 40)
        self.assertEqual(box, (40, 10, 380, 270))
        
        # Resulting size is height - top - bottom by width - right - left
        left, top, right, bottom = box
        self.assertEqual((bottom - top, right - left), (260, 340))
    
    def test_edge_crop_box_is_not_validated(self):
        left, top, right, bottom = edge_crop_box(100, 100, 80, 0, 80, 0)
        self.assertEqual(bottom - top, -60)
    
    def test_center_crop_box(self):
        self.assertEqual(center_crop_box(300, 400, 100, 200), (100, 100, 300, 200))
        
        # Odd remainders floor
        self.assertEqual(center_crop_box(301, 401, 100, 200), (100, 100, 300, 200))
    
    def test_center_crop_box_zero_runs_to_edge(self):
        self.assertEqual(center_crop_box(30, 40, 0, 0), (20, 15, 40, 30))
        self.assertEqual(center_crop_box(300, 400, 10, 0), (200, 145, 400, 155))
    
    def test_aspect_ratio_of_empty_image(self):
        self.assertEqual(aspect_ratio(0, 0), 1.0)
        self.assertEqual(aspect_ratio(300, 400), 0.75)
    
    def test_square_crop_box_landscape(self):
        self.assertEqual(square_crop_box(300, 400), (50, 0, 350, 300))
    
    def test_square_crop_box_portrait_is_top_aligned(self):
        self.assertEqual(square_crop_box(400, 300), (0, 0, 300, 300))


class TestResizeDimensions(unittest.TestCase):
    """Test the aspect resolution helpers."""
    
    def test_landscape_keeps_width(self):
        self.assertEqual(resize_dimensions(300, 400, 150, 200), (0, 200))
    
    def test_portrait_and_square_keep_height(self):
        self.assertEqual(resize_dimensions(400, 300, 200, 150), (200, 0))
        self.assertEqual(resize_dimensions(300, 300, 100, 50), (100, 0))
    
    def test_single_dimension_is_untouched(self):
        self.assertEqual(resize_dimensions(300, 400, 150, 0), (150, 0))
        self.assertEqual(resize_dimensions(300, 400, 0, 0), (0, 0))
    
    def test_scale_dimensions_always_zeroes_one_side(self):
        self.assertEqual(scale_dimensions(300, 400, 150, 200), (0, 200))
        self.assertEqual(scale_dimensions(400, 300, 200, 0), (200, 0))
        self.assertEqual(scale_dimensions(300, 400, 150, 0), (0, 0))
    
    def test_ratio_dimensions(self):
        self.assertEqual(ratio_dimensions(300, 400, 0, 200), (150, 200))
        self.assertEqual(ratio_dimensions(300, 300, 100, 100), (100, 100))
        
        # Portrait width is floor(ratio * height)
        self.assertEqual(ratio_dimensions(400, 300, 200, 0), (200, 266))
    
    def test_ratio_dimensions_minimum_one_pixel(self):
        self.assertEqual(ratio_dimensions(300, 400, 0, 1), (1, 1))
    
    def test_fill_dimensions(self):
        self.assertEqual(fill_dimensions(300, 400, 0, 200), (150, 200))
        self.assertEqual(fill_dimensions(300, 400, 150, 0), (150, 200))
        self.assertEqual(fill_dimensions(300, 400, 10, 10), (10, 10))
        self.assertEqual(fill_dimensions(300, 400, 0, 0), (0, 0))
    
    def test_fill_dimensions_without_a_ratio(self):
        self.assertEqual(fill_dimensions(0, 0, 0, 10), (10, 10))
        self.assertEqual(fill_dimensions(0, 40, 12, 0), (12, 12))
        self.assertEqual(ratio_dimensions(0, 0, 10, 10), (10, 10))


if __name__ == '__main__':
    unittest.main()
