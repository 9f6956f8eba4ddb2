"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='jimtex',
	version='0.1.0',
	packages=['jimtex', ],
	entry_points={
		'console_scripts': ["jimtex = jimtex.cmdline:main"],
	},
	license='MIT',
	description='An interpreter for the arithmetic written in LaTeX documents',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Education",
		"Intended Audience :: Science/Research",
		"Topic :: Software Development :: Interpreters",
		"Topic :: Text Processing :: Markup :: LaTeX",
		"Topic :: Education",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
