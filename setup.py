import os
from glob import glob
from setuptools import find_packages, setup

package_name = 'radar_can_setup'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages', ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        (os.path.join('share', package_name, 'launch'), glob('launch/*.launch.py')),
    ],
    install_requires=['setuptools', 'python-can'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='muup',
    maintainer_email='muup@todo.todo',
    description='CAN interface setup (SocketCAN / SLCAN) and launcher for the smartmicro UMRR radar driver',
    license='Apache-2.0',
    tests_require=['pytest'],
    entry_points={
        'console_scripts': [
            # sudo ros2 run radar_can_setup setup_radar_can [setup|launch|all]
            'setup_radar_can = radar_can_setup.setup_radar_can:main',
        ],
    },
)
