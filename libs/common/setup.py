from setuptools import setup, find_packages

setup(
    name="membership_common",
    version="0.1.0",
    packages=find_packages(),
    install_requires=[
        'fastapi',
        'PyJWT>=2.8.0',  # JWT 토큰 발급/검증
        'bcrypt>=4.0',  # 비밀번호 해시
    ],
)
