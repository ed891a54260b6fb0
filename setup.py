"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='nullcheck',
	version='0.1.0',
	packages=['nullcheck'],
	entry_points={
		'console_scripts': ["nullcheck = nullcheck.cmdline:main"],
	},
	license='MIT',
	description='An optional type checker that catches misuse of null values in annotated functions',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Quality Assurance",
		"Topic :: Education",
		"Environment :: Console",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
		"lark>=1.1",
	]
)
