"""Unit tests for the image buffer and 8-bit conversion."""

import numpy as np
import pytest


class TestImage:
    """Tests for Image storage."""

    def test_new_image_is_black(self):
        """Test a freshly allocated image."""
        from src.spheretrace.core.image import Image

        image = Image(3, 2)
        assert image.width == 3
        assert image.height == 2
        assert image.to_numpy().shape == (2, 3, 3)
        assert np.all(image.to_numpy() == 0.0)

    def test_invalid_dimensions(self):
        """Test non-positive dimensions are rejected."""
        from src.spheretrace.core.image import Image

        with pytest.raises(ValueError):
            Image(0, 10)
        with pytest.raises(ValueError):
            Image(10, -1)

    def test_set_and_get_pixel(self):
        """Test a pixel round trip."""
        from src.spheretrace.core.image import Image

        image = Image(4, 3)
        image.set_pixel(1, 2, (0.25, 0.5, 0.75))
        assert image.get_pixel(1, 2) == pytest.approx((0.25, 0.5, 0.75))

    def test_out_of_bounds_is_ignored(self):
        """Test out-of-range writes are dropped and reads are black."""
        from src.spheretrace.core.image import Image

        image = Image(2, 2)
        image.set_pixel(2, 0, (1.0, 1.0, 1.0))
        image.set_pixel(-1, 0, (1.0, 1.0, 1.0))
        image.set_pixel(0, 5, (1.0, 1.0, 1.0))
        assert np.all(image.to_numpy() == 0.0)
        assert image.get_pixel(7, 7) == (0.0, 0.0, 0.0)
        assert not image.in_bounds(2, 1)
        assert image.in_bounds(1, 1)

    def test_to_numpy_orientation(self):
        """Test the array is indexed [row, column] with row 0 on top."""
        from src.spheretrace.core.image import Image

        image = Image(4, 3)
        image.set_pixel(3, 0, (1.0, 0.0, 0.0))
        image.set_pixel(0, 2, (0.0, 1.0, 0.0))
        arr = image.to_numpy()
        assert arr[0, 3].tolist() == [1.0, 0.0, 0.0]
        assert arr[2, 0].tolist() == [0.0, 1.0, 0.0]

    def test_values_stay_unclamped(self):
        """Test stored colors outside [0, 1] are kept as is."""
        from src.spheretrace.core.image import Image

        image = Image(1, 1)
        image.set_pixel(0, 0, (2.5, -0.5, 0.5))
        assert image.get_pixel(0, 0) == pytest.approx((2.5, -0.5, 0.5))

    def test_fill_and_clear(self):
        """Test filling with a color and clearing back to black."""
        from src.spheretrace.core.image import Image

        image = Image(2, 2)
        image.fill((0.5, 0.7, 1.0))
        assert np.allclose(image.to_numpy(), [0.5, 0.7, 1.0])
        image.clear()
        assert np.all(image.to_numpy() == 0.0)

    def test_repr(self):
        """Test the string representation."""
        from src.spheretrace.core.image import Image

        assert repr(Image(8, 6)) == "Image(width=8, height=6)"


class TestUint8Conversion:
    """Tests for scale, truncate and clamp."""

    def test_truncates_and_clamps(self):
        """Test overbright, negative and fractional channels."""
        from src.spheretrace.core.image import Image

        image = Image(1, 1)
        image.set_pixel(0, 0, (1.5, -0.2, 0.5))
        assert image.to_uint8()[0, 0].tolist() == [255, 0, 127]

    def test_exact_endpoints(self):
        """Test 0 and 1 map to 0 and 255."""
        from src.spheretrace.core.image import image_to_uint8

        arr = np.array([[[0.0, 1.0, 0.999]]], dtype=np.float32)
        out = image_to_uint8(arr)
        assert out.dtype == np.uint8
        assert out[0, 0].tolist() == [0, 255, 254]

    def test_nan_maps_to_zero(self):
        """Test NaN channels do not produce garbage bytes."""
        from src.spheretrace.core.image import image_to_uint8

        arr = np.array([[[np.nan, 0.2, 0.4]]], dtype=np.float64)
        assert image_to_uint8(arr)[0, 0].tolist() == [0, 51, 102]
