"""Android build entrypoint.

python-for-android/buildozer look for a `main.py` when packaging; this hands
over to the Android bootstrap of the alarm.
"""

from entrypoints.daybreak_android import main as run_android_app

if __name__ == "__main__":
  run_android_app()
