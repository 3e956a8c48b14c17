import setuptools

setuptools.setup(
    name="supersonic-cone",
    version="0.1.0",
    description="Isentropic, oblique-shock and Taylor-Maccoll conical flow relations",
    license="gpl-3.0",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
    ],
    package_dir={"": "."},
    packages=setuptools.find_packages(where=".", include=["supersonic", "supersonic.*"]),
    python_requires=">=3.7",
    install_requires=["numpy"],
    extras_require={
        "test": ["pytest", "scipy"],
    },
)
