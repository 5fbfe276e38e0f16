"""Stage compute, render and contract functions.

Each stage has three parts:

- ``compute_*(state, controls, provider, config)`` replaces the fields the
  stage owns. Inputs are only read, never modified.
- ``render_*(state, controls, sink, config)`` pushes the stage's panel to a
  presentation sink.
- ``check_*(state, config)`` enforces the stage contract after compute.

The scheduler decides which of these run for a given trigger.
"""

import logging

from imgfreq.contracts import (
    assert_centred,
    assert_display_buffer,
    assert_filter,
    assert_luminance,
    assert_output,
    assert_spectrum,
)
from imgfreq.imaging.colour import blend, field_mean, rgb_image_to_luminance
from imgfreq.imaging.frequency import (
    FilterSpec,
    band_pass_filter,
    forward_fft,
    magnitude,
    radial_profile,
    reconstruct,
)
from imgfreq.imaging.spatial import fft_shift, to_log_polar
from imgfreq.pipeline.controls import CARTESIAN, LOG_POLAR
from imgfreq.visualization.presentation import profile_polyline, to_display_buffer

logger = logging.getLogger(__name__)


def _show(sink, panel, buffer, size):
    assert_display_buffer(buffer, size)
    sink.show(panel, buffer)


# =============================================================================
# Source
# =============================================================================

def compute_source(state, controls, provider, config):
    """Reads ``controls.image_source``; writes ``luminance``, ``source_name``.

    The provider raises AcquisitionFailure before anything is written, so a
    failed load leaves the previous image in place.
    """
    name = controls.image_source
    rgb = provider.load(name)
    luminance = rgb_image_to_luminance(rgb)

    state.luminance = luminance
    state.source_name = name
    logger.debug("Source '%s' loaded (mean luminance %.4f)", name, luminance.mean())


def check_source(state, config):
    assert_luminance(state.luminance, state.size)


# =============================================================================
# Window
# =============================================================================

def compute_window(state, controls, provider, config):
    """Reads ``luminance``, ``aperture``; writes ``windowed``, ``lum_mean``, ``centred``."""
    if controls.apply_window:
        windowed = blend(state.luminance, config.window.background, state.aperture)
    else:
        windowed = state.luminance.copy()

    lum_mean = field_mean(windowed)

    state.windowed = windowed
    state.lum_mean = lum_mean
    state.centred = windowed - lum_mean
    logger.debug("Window %s, mean luminance %.4f", "on" if controls.apply_window else "off", lum_mean)


def render_window(state, controls, sink, config):
    _show(sink, "image", to_display_buffer(state.windowed, to_srgb=True), state.size)


def check_window(state, config):
    assert_centred(state.windowed, state.centred, state.lum_mean, state.size)


# =============================================================================
# Spectrum
# =============================================================================

def compute_spectrum(state, controls, provider, config):
    """Reads ``centred``; writes ``spectrum``, the magnitude views and ``profile``."""
    spectrum = forward_fft(state.centred)
    mag = magnitude(spectrum)
    mag_shifted = fft_shift(mag)
    mag_polar, profile = radial_profile(mag_shifted)

    state.spectrum = spectrum
    state.magnitude = mag
    state.magnitude_shifted = mag_shifted
    state.magnitude_polar = mag_polar
    state.profile = profile
    logger.debug("Spectrum computed (peak magnitude %.4g)", mag.max())


def render_spectrum(state, controls, sink, config):
    if controls.axes == CARTESIAN:
        buffer = to_display_buffer(
            state.magnitude_shifted, normalise=True, to_srgb=True, to_lightness=True,
            zoom=controls.zoom,
        )
    else:
        buffer = to_display_buffer(
            state.magnitude_polar, normalise=True, to_srgb=True, to_lightness=True,
        )
    _show(sink, "spectrum", buffer, state.size)

    if controls.axes == LOG_POLAR and controls.show_profile:
        sink.show_profile(profile_polyline(
            state.profile, state.size,
            amp_mean_max=config.display.amp_mean_max,
            floor=config.display.profile_floor,
        ))
    else:
        sink.show_profile(None)


def check_spectrum(state, config):
    assert_spectrum(
        state.spectrum, state.magnitude, state.magnitude_shifted,
        state.magnitude_polar, state.profile, state.size,
    )


# =============================================================================
# Filter
# =============================================================================

def compute_filter(state, controls, provider, config):
    """Reads ``distance`` and the cutoffs; writes the ``filter_*`` fields."""
    f = config.filter
    spec = FilterSpec.from_raw(
        controls.low_cutoff, controls.high_cutoff,
        exponent=f.exponent, outer_scale=f.outer_scale, raw_max=f.raw_max,
    )
    filter_shifted = band_pass_filter(state.distance, spec)

    state.filter_spec = spec
    state.filter_shifted = filter_shifted
    state.filter_unshifted = fft_shift(filter_shifted)
    state.filter_polar = to_log_polar(filter_shifted)
    logger.debug("Filter band [%.4g, %.4g] from raw (%d, %d)",
                 spec.inner, spec.outer, controls.low_cutoff, controls.high_cutoff)


def render_filter(state, controls, sink, config):
    if controls.axes == CARTESIAN:
        buffer = to_display_buffer(state.filter_shifted, to_srgb=False, zoom=controls.zoom)
    else:
        buffer = to_display_buffer(state.filter_polar, to_srgb=False)
    _show(sink, "filter", buffer, state.size)


def check_filter(state, config):
    assert_filter(state.filter_spec, state.filter_shifted, state.filter_unshifted, state.size)


# =============================================================================
# Output
# =============================================================================

def compute_output(state, controls, provider, config):
    """Reads ``spectrum``, ``filter_unshifted``, ``lum_mean``; writes ``output``."""
    state.output = reconstruct(state.spectrum, state.filter_unshifted, state.lum_mean)
    logger.debug("Output reconstructed (mean %.4f)", state.output.mean())


def render_output(state, controls, sink, config):
    _show(sink, "output", to_display_buffer(state.output, to_srgb=True), state.size)


def check_output(state, config):
    assert_output(state.output, state.size)
