from setuptools import setup, find_packages

setup(
    name="membership_schemas",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        'pydantic>=2',
        'membership_common',  # Member 가 libs.common 의 시각 유틸리티를 사용
    ],
)
