# python setup.py build_ext -i clean
import os
import sys

from Cython.Build import cythonize
from setuptools import Extension, setup

try:
    import numpy as np
except ImportError:
    raise RuntimeError(
        "NumPy is required to build this package. Please install it first."
    )

COMPILER_DIRECTIVES = {
    "language_level": 3,
    "boundscheck": False,
    "wraparound": False,
    "initializedcheck": False,
    "nonecheck": False,
    "cdivision": True,
    "profile": False,
    # Modules are plain Python; keep annotations as documentation only.
    "annotation_typing": False,
}

NUMPY_C_API = [
    ("NPY_NO_DEPRECATED_API", "NPY_1_9_API_VERSION")
]

# Pure Python modules compiled for speed; they also import uncompiled.
source_files = [
    ("minheap.heap.storage", "minheap/heap/storage.py"),
    ("minheap.heap.min_heap", "minheap/heap/min_heap.py"),
]

PACKAGES = [
    "minheap",
    "minheap.heap",
    "minheap.metrics",
]


def get_openmp_flags() -> tuple[list]:
    """Get OpenMP compiler and linker flags based on platform."""
    if sys.platform == "win32":
        return ["/openmp"], []
    if sys.platform == "darwin":
        # macOS with Homebrew libomp
        if "openmp" in os.getenv("CPPFLAGS", ""):
            return ["-Xpreprocessor", "-fopenmp"], ["-lomp"]
        return [], []
    else:  # noqa: RET505
        # Linux and other Unix-like systems
        return ["-fopenmp"], ["-fopenmp"]


def create_extensions(
    source_files: list[tuple],
    enable_openmp: bool = False
) -> list[Extension]:
    """
    Create Cython extensions for the listed source files.

    Parameters
    ----------
    source_files : list[tuple]
        A list of tuples. The first element of the tuple is the module in
        `package.module` format. The second element is the `path` to the file.
    enable_openmp : bool
        Flag for enabling openmp when compiling, by default False since the
        heap runs single-threaded. Set MINHEAP_OPENMP=1 to turn it on.

    Returns
    -------
    list[Extension]
        A list of Cython extensions
    """
    extensions = []
    openmp_compile_flags, openmp_link_flags = (
        get_openmp_flags()
        if enable_openmp
        else ([], [])
    )

    for module_name, source_path in source_files:
        extra_compile_args = [
            f"-D{name}={value}"
            for name, value in NUMPY_C_API
        ]
        extra_link_args = []

        if enable_openmp and openmp_compile_flags:
            extra_compile_args.extend(openmp_compile_flags)
            extra_link_args.extend(openmp_link_flags)

        if sys.platform != "win32":
            extra_compile_args.append("-O3")

        extension = Extension(
            name=module_name,
            sources=[source_path],
            include_dirs=[np.get_include()],
            extra_compile_args=extra_compile_args,
            extra_link_args=extra_link_args,
            language="c"
        )
        extensions.append(extension)
    return extensions


def main() -> None:
    """Main setup function for compiling"""
    # Filter out non-existing files
    files = [
        (name, path)
        for name, path in source_files
        if os.path.exists(path)
    ]

    if not files:
        raise RuntimeError("No source files found to compile")

    extensions = create_extensions(
        files,
        enable_openmp=os.getenv("MINHEAP_OPENMP") == "1"
    )

    setup(
        ext_modules=cythonize(
            extensions,
            compiler_directives=COMPILER_DIRECTIVES,
            language_level=3
        ),
        packages=PACKAGES,
        zip_safe=False
    )


if __name__ == "__main__":
    main()
