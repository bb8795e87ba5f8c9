"""Base class for real-time oscilloscope XY display."""


class ScopePlayer:
    """
    Base class for real-time XY oscilloscope audio streaming.

    Subclasses either set self.xy_data (a looped (N, 2) buffer) or
    override audio_callback() for dynamic content. Left channel is X,
    right channel is Y.
    """

    def __init__(self, sample_rate=48000, secs=0.05, amp=0.7, device=None):
        if sample_rate <= 0 or secs <= 0:
            raise ValueError(f"sample_rate and secs must be positive "
                             f"(got {sample_rate}, {secs})")
        self.sample_rate = sample_rate
        self.secs = secs
        self.amp = amp
        self.device = device
        self.samples = int(sample_rate * secs)
        self.xy_data = None
        self.position = 0
        self.global_sample = 0

    def _check_status(self, status):
        if status:
            print(f"Audio status: {status}")

    def _fill_buffer(self, outdata, frames):
        """Fill output buffer by looping through xy_data."""
        if self.xy_data is None or len(self.xy_data) == 0:
            outdata.fill(0)
            return

        data_len = len(self.xy_data)
        out_idx = 0

        while out_idx < frames:
            chunk_size = min(frames - out_idx, data_len - self.position)
            outdata[out_idx:out_idx + chunk_size] = self.xy_data[self.position:self.position + chunk_size]
            self.position = (self.position + chunk_size) % data_len
            out_idx += chunk_size

    def audio_callback(self, outdata, frames, time, status):
        """Sounddevice callback. Override for custom behavior."""
        self._check_status(status)
        self._fill_buffer(outdata, frames)
        self.global_sample += frames

    def _on_start(self):
        """Called when stream starts. Override for custom message."""
        print("Playing. Press Ctrl+C to stop.")

    def _on_stop(self):
        """Called when stream stops. Override for custom message."""
        print("\nStopped.")

    def open_stream(self, **kwargs):
        # sounddevice loads PortAudio on import; only needed once a stream opens
        import sounddevice as sd
        return sd.OutputStream(
            samplerate=self.sample_rate,
            channels=2,
            dtype='float32',
            callback=self.audio_callback,
            device=self.device,
            **kwargs
        )

    def run(self):
        """Start the audio stream and block until Ctrl+C."""
        import sounddevice as sd
        with self.open_stream():
            self._on_start()
            try:
                while True:
                    sd.sleep(1000)
            except KeyboardInterrupt:
                self._on_stop()


def add_common_args(parser, secs_default=0.05):
    """Add common stream arguments to an argument parser."""
    parser.add_argument("--rate", type=int, default=48000,
                        help="Sample rate in Hz")
    parser.add_argument("--secs", type=float, default=secs_default,
                        help="Duration of one trace cycle")
    parser.add_argument("--amp", type=float, default=0.7,
                        help="Output amplitude (0-1)")
    parser.add_argument("--device", type=str, default=None,
                        help="Audio output device")


def common_args_from_parsed(args):
    """Extract common arguments as a dict for passing to ScopePlayer."""
    return {
        'sample_rate': args.rate,
        'secs': args.secs,
        'amp': args.amp,
        'device': args.device,
    }
