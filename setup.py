#!/usr/bin/env python3

from setuptools import setup
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="audiograph",
        packages=[
            "audiograph",
            "audiograph.apps",
            "audiograph.audio",
            "audiograph.editor",
            "audiograph.nodegraph",
        ],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Audio-reactive node graph editor driving shader parameters",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["node graph", "audio", "visualization"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "numpy",
            "PyQt6>=6.4",
        ],
        extras_require={
            "test": ["pytest"],
        },
        entry_points={
            "gui_scripts": [
                "audiograph-node-editor=audiograph.apps.node_editor:main",
            ],
        },
        zip_safe=False,
    )
