"""Formal pipeline invariants.

This file documents what each stage MUST produce. This is architecture, not code.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "source": [
        "luminance is float, shape (N, N), finite, in [0, 1]",
        "luminance is the weighted sum of linearised R, G, B (0.2126, 0.7152, 0.0722)",
        "A failed acquisition leaves every field untouched",
    ],

    "window": [
        "windowed = blend(luminance, background, aperture) when windowing is on, else a copy of luminance",
        "lum_mean is the scalar mean of windowed",
        "centred = windowed - lum_mean, mean(centred) == 0",
    ],

    "spectrum": [
        "spectrum is the unnormalised forward DFT of centred (imaginary input zero)",
        "magnitude = sqrt(real^2 + imag^2), magnitude_shifted = fft_shift(magnitude)",
        "magnitude_polar rows index angle, columns index log-radius",
        "profile[j] = mean over rows of magnitude_polar[:, j]",
    ],

    "filter": [
        "inner cutoff < outer cutoff",
        "filter_shifted[cell] = 1 iff inner <= distance[cell] <= outer, else 0",
        "filter_unshifted = fft_shift(filter_shifted)",
    ],

    "output": [
        "output = clip(real(inverse_dft(spectrum * filter_unshifted)) + lum_mean, 0, 1)",
        "Not recomputed on FILTER_CHANGE (live drag); recomputed on FILTER_SET",
        "All-ones filter reconstructs windowed (within float tolerance, before clipping)",
    ],
}

# Which render-only triggers refresh which panels
RENDER_TRIGGERS = {
    "image": (),
    "spectrum": ("ZOOM", "AXES_CHANGE", "SHOW_PROFILE"),
    "filter": ("ZOOM", "AXES_CHANGE"),
    "output": (),
}
