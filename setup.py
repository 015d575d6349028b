from setuptools import setup, find_packages

setup(
    name="plotterm",
    packages=find_packages(include=["plotterm", "plotterm.*"]),
    version="0.1.0",
    license="LGPLv3+",
    description="Interactive function plotter for the text terminal, with mouse pan and zoom",
    keywords="terminal plot graph function math braille ANSI",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    include_package_data=True,
    zip_safe=True,
    python_requires=">=3.8",
    install_requires=["click", 'colorama;platform_system=="Windows"'],
    extras_require={
        "tests": ["pytest"],
    },
    entry_points="""
        [console_scripts]
        plotterm=plotterm.app:main
    """,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Scientific/Engineering :: Visualization",
        "Topic :: Terminals",
    ],
)
