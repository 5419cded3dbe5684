"""
Basic Usage Example for Muqassim

This example demonstrates the simplest way to use Muqassim:
1. Load a recitation
2. Auto-segment it on silences
3. Correct the result by hand
4. Export the timings
"""

from muqassim import AnnotationList, build_export, detect_regions, load_audio, to_json
from muqassim.core import format_time


def main():
    # Path to your audio file
    audio_path = "Quran/recitations/001.mp3"
    surah_number = 1

    print(f"Processing Surah {surah_number}...\n")

    # Step 1: Decode the audio
    print("Step 1: Loading audio...")
    buffer = load_audio(audio_path)
    print(f"  {buffer.duration:.2f} seconds, {buffer.n_channels} channel(s) at {buffer.sample_rate} Hz\n")

    # Step 2: Split on silences
    print("Step 2: Detecting ayah regions...")
    regions = detect_regions(buffer, threshold=0.02, min_silence_duration=0.8)
    annotations = AnnotationList()
    annotations.replace_with_regions(regions)
    print(f"  Found {len(regions)} regions\n")

    # Step 3: Manual corrections
    print("Step 3: Correcting...")
    if len(annotations) > 7:
        # The recitation of Al-Fatiha ends with aameen
        last = annotations[-1]
        annotations.remove(last.id)
        annotations.add_aameen(last.start, last.end)
    print(f"  {annotations.ayah_count} ayahs, aameen: {annotations.aameen is not None}\n")

    # Step 4: Display and export
    print("Results:")
    print("-" * 40)
    for segment in annotations:
        print(f"{segment.label:>4}: {format_time(segment.start)} - {format_time(segment.end)}")

    document = build_export(annotations, surah=surah_number, audio=audio_path)
    print("\n" + to_json(document))


if __name__ == "__main__":
    main()
