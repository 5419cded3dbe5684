"""
Overlay Session Example

Shows how a UI layer wires its waveform player and region overlay into an
AnnotationSession:
- the session mutates the annotation list first
- the overlay is then patched to match
- drags on the overlay come back as ordinary field updates
"""

from muqassim import AnnotationSession, OverlayRegion


class PrintingOverlay:
    """Stand-in for a waveform region overlay that logs every operation."""

    def __init__(self):
        self.regions: dict[str, OverlayRegion] = {}

    def add_region(self, region_id, start, end, color, draggable=True, resizable=True):
        print(f"  + {region_id[:6]} {start:.2f}-{end:.2f} {color}")
        self.regions[region_id] = OverlayRegion(id=region_id, start=start, end=end, color=color)

    def list_regions(self):
        return list(self.regions.values())

    def update_region(self, region_id, start=None, end=None, color=None):
        print(f"  ~ {region_id[:6]} start={start} end={end} color={color}")
        changes = {k: v for k, v in {"start": start, "end": end, "color": color}.items() if v is not None}
        self.regions[region_id] = self.regions[region_id].model_copy(update=changes)

    def remove_region(self, region_id):
        print(f"  - {region_id[:6]}")
        del self.regions[region_id]


class StaticPlayer:
    """Playback engine whose playhead only moves when told to."""

    def __init__(self):
        self.current_time = 0.0

    def seek(self, seconds):
        self.current_time = seconds

    def load(self, source):
        print(f"Loading {source}")

    def play(self, start=None, end=None):
        print(f"Playing {start:.2f}-{end:.2f}")


def main():
    player = StaticPlayer()
    overlay = PrintingOverlay()

    with AnnotationSession(playback=player, overlay=overlay) as session:
        session.open("Quran/recitations/112.mp3")

        print("\nAdding two ayahs at the playhead:")
        first = session.add_ayah()
        player.seek(3.0)
        second = session.add_ayah()

        print("\nUser drags the first region slightly (inside the dead-band):")
        session.on_overlay_region_updated(first.id, 0.05, 2.05)

        print("\nCapturing the end of the second ayah:")
        player.seek(6.4)
        session.capture(second.id, "end")

        print("\nReordering and adding the aameen:")
        session.move(1, 0)
        session.add_aameen()

        print("\nFinal list:")
        for segment in session.annotations:
            print(f"  {segment}")


if __name__ == "__main__":
    main()
