"""`imgfreq` - interactive exploration of images in the frequency domain.

Subpackages:
- imaging: colour transforms, spatial fields, 2-D DFT and band-pass filter
- sources: sample, bundled, custom, URL and webcam images
- pipeline: triggers, stages, scheduler, session
- visualization: display buffers, figures, export, interactive viewer
- schemas / contracts: configuration and stage invariants
"""

__version__ = "0.1.0"
