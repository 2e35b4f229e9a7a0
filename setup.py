"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='tailtype',
	version='0.1.0',
	packages=['tailtype'],
	entry_points={
		'console_scripts': ["tailtype = tailtype.cmdline:main"],
	},
	license='MIT',
	description='Static type inference for the expressions of a log-tailing metrics language',
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Topic :: System :: Logging",
		"Environment :: Console",
    ],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
