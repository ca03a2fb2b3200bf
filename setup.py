from setuptools import find_packages, setup

# The scheduler launches `daybreak-fire` by name, so both commands are
# installed as console scripts.

package_list = find_packages(
  include=[
    "alarm",
    "alarm.*",
    "entrypoints",
    "entrypoints.*",
    "os_interfaces",
    "os_interfaces.*",
    "notification",
    "notification.*",
  ]
)

setup(
  name="daybreak",
  version="0.1.0",
  description="Daily wake-up alarm kept in sync with the OS scheduler",
  python_requires=">=3.11",
  packages=package_list,
  include_package_data=True,
  install_requires=[
    "pyyaml",
    "pydantic>=2",
    "python-dotenv",
    "platformdirs",
  ],
  extras_require={
    "android": ["pyjnius", "cython==3.0.12", "buildozer"],
    "linux": ["desktop-notifier>=5", "pystemd"],
    "dev": ["pytest", "pytest-asyncio", "pytest-cov"],
  },
  entry_points={
    "console_scripts": [
      "daybreak=entrypoints.daybreak_linux:main",
      "daybreak-fire=notification.main:run",
    ],
  },
)
